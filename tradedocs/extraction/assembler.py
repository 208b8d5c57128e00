"""Builds the structured result of a run from its ordered step outputs.

Each document type maps step numbers to a section rule: the section the step
fills, the JSON shape its output must have and whether it also becomes the
run's ``extracted_data``. A step whose output does not parse into the expected
shape leaves its section absent; the remaining steps are still assembled.
"""

import json
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import partial, reduce
from typing import Any

from tradedocs.extraction.models import (
    DocumentType,
    Section,
    SectionMetadata,
    StepResult,
    StructuredResult,
)
from tradedocs.logging.logger import Log


class Shape(str, Enum):
    OBJECT = "object"
    ARRAY = "array"
    TEXT = "text"


@dataclass(frozen=True)
class SectionRule:
    section: str
    shape: Shape
    mirror_extracted: bool = False
    raw_text_fallback: bool = False


AssemblyPolicy = dict[int, SectionRule]

_HEADER = SectionRule("header", Shape.OBJECT)

GENERIC_POLICY: AssemblyPolicy = {
    1: _HEADER,
    2: SectionRule("containers", Shape.ARRAY),
    3: SectionRule("dispositionExplanation", Shape.TEXT),
    4: SectionRule("items", Shape.ARRAY, mirror_extracted=True, raw_text_fallback=True),
}

POLICIES: dict[DocumentType, AssemblyPolicy] = {
    DocumentType.SWIFT: {
        1: SectionRule("header", Shape.OBJECT, mirror_extracted=True),
    },
    DocumentType.DI: {
        1: _HEADER,
        2: SectionRule("items", Shape.ARRAY, mirror_extracted=True),
        3: SectionRule("taxInfo", Shape.ARRAY),
    },
    DocumentType.NUMERARIO: {
        1: SectionRule("diInfo", Shape.OBJECT),
        2: _HEADER,
        3: SectionRule("items", Shape.ARRAY, mirror_extracted=True),
    },
    DocumentType.NOTA_FISCAL: {
        1: _HEADER,
        2: SectionRule("items", Shape.ARRAY),
    },
    DocumentType.COMMERCIAL_INVOICE: {
        1: _HEADER,
        2: SectionRule("items", Shape.ARRAY, mirror_extracted=True),
    },
    DocumentType.PROFORMA_INVOICE: {
        1: _HEADER,
        2: SectionRule("items", Shape.ARRAY),
    },
    DocumentType.PACKING_LIST: GENERIC_POLICY,
}

_SHAPE_MARKERS: dict[Shape, tuple[str, str, type]] = {
    Shape.OBJECT: ("{", "}", dict),
    Shape.ARRAY: ("[", "]", list),
}


@dataclass(frozen=True)
class Assembly:
    structured_result: StructuredResult = field(default_factory=StructuredResult)
    extracted_data: Any = field(default_factory=dict)
    raw_text: str = ""

    def final_raw_text(self) -> str:
        """Fallback raw text if one was recorded, else the pretty-printed extracted data."""
        if self.raw_text:
            return self.raw_text
        return json.dumps(self.extracted_data, indent=2, ensure_ascii=False)


def policy_for(document_type: str) -> AssemblyPolicy:
    mapped = DocumentType.parse(document_type)
    if mapped is None:
        return GENERIC_POLICY
    return POLICIES[mapped]


def assemble(document_type: str, step_results: list[StepResult]) -> Assembly:
    """Fold the ordered step results into an Assembly. Never raises on bad output."""
    apply_step = partial(_apply_step, document_type, policy_for(document_type))
    return reduce(apply_step, step_results, Assembly())


def parse_shaped(text: str, shape: Shape) -> Any | None:
    """Parse ``text`` as a JSON object or array, or return None.

    The bracket check only picks the parser; the value must also parse and
    have the expected type.
    """
    opener, closer, expected_type = _SHAPE_MARKERS[shape]
    if not (text.startswith(opener) and text.endswith(closer)):
        Log.warning(f"Output does not look like a JSON {shape.value}")
        return None
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        Log.warning(f"Failed to parse JSON {shape.value}: {exc}")
        return None
    if not isinstance(parsed, expected_type):
        Log.warning(f"Parsed JSON is not a {shape.value}")
        return None
    return parsed


def _apply_step(
    document_type: str,
    policy: AssemblyPolicy,
    assembly: Assembly,
    step_result: StepResult,
) -> Assembly:
    rule = policy.get(step_result.step)
    if rule is None:
        Log.warning(f"No assembly rule for step {step_result.step} of '{document_type}'")
        return assembly

    text = step_result.raw_result.strip()
    if rule.shape is Shape.TEXT:
        data: Any = text
    else:
        data = parse_shaped(text, rule.shape)
        if data is None:
            Log.warning(
                f"Step {step_result.step} of '{document_type}' skipped for section "
                f"'{rule.section}'"
            )
            Log.debug(f"Unparsed output of step {step_result.step}:\n{step_result.raw_result}")
            if rule.raw_text_fallback:
                return replace(assembly, raw_text=text)
            return assembly

    section = Section(
        data=data,
        source=f"step_{step_result.step}",
        metadata=SectionMetadata(
            step=step_result.step,
            step_name=step_result.step_name,
            step_description=step_result.step_description,
            processing_time_ms=step_result.processing_time_ms,
            item_count=len(data) if isinstance(data, list) else None,
        ),
    )
    Log.debug(f"Step {step_result.step} of '{document_type}' filled section '{rule.section}'")
    return replace(
        assembly,
        structured_result=assembly.structured_result.with_section(rule.section, section),
        extracted_data=data if rule.mirror_extracted else assembly.extracted_data,
    )
