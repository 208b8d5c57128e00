"""Ordered prompt steps for each document type."""

from dataclasses import dataclass
from pathlib import Path

from tradedocs.extraction.models import DocumentType, PromptStep
from tradedocs.extraction.prompt_loader import load_prompt
from tradedocs.logging.logger import Log


@dataclass(frozen=True)
class _StepSpec:
    name: str
    description: str
    expects_prior_output: bool = False


_STEP_SPECS: dict[DocumentType, tuple[_StepSpec, ...]] = {
    DocumentType.SWIFT: (
        _StepSpec("SWIFT Data Extraction", "Extracting every field of the SWIFT message"),
    ),
    DocumentType.DI: (
        _StepSpec("DI General Data", "Extracting the general data of the import declaration"),
        _StepSpec("DI Items", "Extracting every item individually with its details", True),
        _StepSpec("Tax Information", "Extracting tax information per item", True),
    ),
    DocumentType.NUMERARIO: (
        _StepSpec("DI Reference", "Extracting the DI number and settlement data"),
        _StepSpec("Invoice Header", "Extracting the general data of the invoice"),
        _StepSpec("Invoice Items", "Extracting every product of the invoice", True),
    ),
    DocumentType.NOTA_FISCAL: (
        _StepSpec("Header", "Extracting the general data of the electronic invoice"),
        _StepSpec("Items", "Extracting every product of the electronic invoice", True),
    ),
    DocumentType.COMMERCIAL_INVOICE: (
        _StepSpec("General Data", "Extracting the commercial invoice header"),
        _StepSpec("Items", "Extracting the detailed item list of the commercial invoice"),
    ),
    DocumentType.PROFORMA_INVOICE: (
        _StepSpec("General Data", "Extracting the proforma invoice header"),
        _StepSpec("Items", "Extracting the detailed item list of the proforma invoice"),
    ),
    DocumentType.PACKING_LIST: (
        _StepSpec("General Data", "Extracting header data (invoice, consignee, dates)"),
        _StepSpec("Container Identification", "Identifying containers and mapping items to them"),
        _StepSpec(
            "Disposition Explanation",
            "Explaining how items are distributed across containers",
            True,
        ),
        _StepSpec(
            "Final Distribution",
            "Distributing the final items with full details per container",
            True,
        ),
    ),
}

_GENERIC_PROMPT = "generic_step1"


def supported_document_types() -> list[str]:
    return [document_type.value for document_type in _STEP_SPECS]


class StepCatalog:
    """Resolves the prompt steps a document type is processed with.

    Unmapped document types get a single generic step instead of an error, so a
    run never aborts only because a type has no specialised catalog.
    """

    def __init__(self, prompts_dir: Path | None = None) -> None:
        self._prompts_dir = prompts_dir

    def get_steps(self, document_type: str) -> list[PromptStep]:
        """Return the steps for ``document_type``, ordered and numbered from 1."""
        mapped = DocumentType.parse(document_type)
        if mapped is None:
            Log.warning(
                f"No step catalog for document type '{document_type}', "
                "using the generic single-step prompt"
            )
            return [self._generic_step(document_type)]

        return [
            PromptStep(
                step=number,
                name=spec.name,
                description=spec.description,
                prompt_text=load_prompt(f"{mapped.value}_step{number}", self._prompts_dir),
                expects_prior_output=spec.expects_prior_output,
            )
            for number, spec in enumerate(_STEP_SPECS[mapped], start=1)
        ]

    def _generic_step(self, document_type: str) -> PromptStep:
        template = load_prompt(_GENERIC_PROMPT, self._prompts_dir)
        return PromptStep(
            step=1,
            name="Process Document",
            description=f"Processing document of type {document_type}",
            prompt_text=template.replace("{document_type}", document_type),
        )
