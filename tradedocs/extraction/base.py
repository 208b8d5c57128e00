from abc import ABC, abstractmethod

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.models import MultiPromptResult, ProgressCallback


class BaseExtractor(ABC):
    """Contract for all document extractors."""

    @abstractmethod
    def run(
        self,
        document_bytes: bytes,
        document_type: str,
        on_progress: ProgressCallback | None = None,
        cancel_token: CancellationToken | None = None,
    ) -> MultiPromptResult:
        """Extract structured data from a PDF through the type's prompt steps.

        Args:
            document_bytes: Raw PDF file content.
            document_type: Document type tag selecting the steps and assembly policy.
            on_progress: Called as (step, total_steps, name, description) before each step.
            cancel_token: Optional token aborting the run between or during model calls.

        Returns:
            MultiPromptResult with per-step outputs and the assembled result.

        Raises:
            ExtractionError: when a model call fails; no partial result is returned.
        """
