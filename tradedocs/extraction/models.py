from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DocumentType(str, Enum):
    """Document types with a dedicated step catalog and assembly policy."""

    PACKING_LIST = "packing_list"
    COMMERCIAL_INVOICE = "commercial_invoice"
    PROFORMA_INVOICE = "proforma_invoice"
    SWIFT = "swift"
    DI = "di"
    NUMERARIO = "numerario"
    NOTA_FISCAL = "nota_fiscal"

    @classmethod
    def parse(cls, value: str) -> "DocumentType | None":
        """Return the matching member, or None for an unmapped value."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


ProgressCallback = Callable[[int, int, str, str], None]


@dataclass(frozen=True)
class PromptStep:
    """One prompt of a document type's step catalog."""

    step: int
    name: str
    description: str
    prompt_text: str
    expects_prior_output: bool = False


@dataclass(frozen=True)
class TokenUsage:
    input: int = 0
    output: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(input=self.input + other.input, output=self.output + other.output)

    def to_dict(self) -> dict[str, int]:
        return {"input": self.input, "output": self.output}


@dataclass(frozen=True)
class ModelResponse:
    """Complete response of a single model call."""

    raw_text: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    wall_clock_ms: int = 0


@dataclass(frozen=True)
class StepResult:
    """Sanitized output of one executed step."""

    step: int
    step_name: str
    step_description: str
    raw_result: str
    token_usage: TokenUsage = field(default_factory=TokenUsage)
    processing_time_ms: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "step": self.step,
            "stepName": self.step_name,
            "stepDescription": self.step_description,
            "rawResult": self.raw_result,
            "tokenUsage": self.token_usage.to_dict(),
            "processingTimeMs": self.processing_time_ms,
        }


@dataclass(frozen=True)
class SectionMetadata:
    """Provenance of a structured section."""

    step: int
    step_name: str
    step_description: str
    processing_time_ms: int = 0
    item_count: int | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "step": self.step,
            "stepName": self.step_name,
            "stepDescription": self.step_description,
            "processingTimeMs": self.processing_time_ms,
        }
        if self.item_count is not None:
            data["itemCount"] = self.item_count
        return data


@dataclass(frozen=True)
class Section:
    data: Any
    source: str
    metadata: SectionMetadata

    def to_dict(self) -> dict[str, object]:
        return {
            "data": self.data,
            "source": self.source,
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class StructuredResult:
    """Named sections assembled from the step outputs.

    Immutable: ``with_section`` returns a new value, leaving this one untouched.
    """

    sections: Mapping[str, Section] = field(default_factory=dict)

    def with_section(self, name: str, section: Section) -> "StructuredResult":
        return StructuredResult(sections={**self.sections, name: section})

    def get(self, name: str) -> Section | None:
        return self.sections.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.sections

    def section_data(self) -> dict[str, Any]:
        """Section name to section data, the view required fields resolve against."""
        return {name: section.data for name, section in self.sections.items()}

    def to_dict(self) -> dict[str, object]:
        return {name: section.to_dict() for name, section in self.sections.items()}


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    missing_fields: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"isValid": self.is_valid, "missingFields": list(self.missing_fields)}


@dataclass(frozen=True)
class FinalResult:
    raw_text: str
    extracted_data: Any
    structured_result: StructuredResult
    validation: ValidationResult | None = None

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "rawText": self.raw_text,
            "extractedData": self.extracted_data,
            "structuredResult": self.structured_result.to_dict(),
        }
        if self.validation is not None:
            data["validation"] = self.validation.to_dict()
        return data


@dataclass(frozen=True)
class RunMetadata:
    total_processing_time_ms: int
    total_token_usage: TokenUsage
    steps_completed: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "totalProcessingTimeMs": self.total_processing_time_ms,
            "totalTokenUsage": self.total_token_usage.to_dict(),
            "stepsCompleted": list(self.steps_completed),
        }


@dataclass(frozen=True)
class MultiPromptResult:
    """Output of one complete extraction run."""

    success: bool
    document_type: str
    total_steps: int
    steps: list[StepResult]
    final_result: FinalResult
    metadata: RunMetadata

    def to_dict(self) -> dict[str, object]:
        return {
            "success": self.success,
            "documentType": self.document_type,
            "totalSteps": self.total_steps,
            "steps": [step.to_dict() for step in self.steps],
            "finalResult": self.final_result.to_dict(),
            "metadata": self.metadata.to_dict(),
        }
