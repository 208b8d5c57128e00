from abc import ABC, abstractmethod

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.models import ModelResponse


class BaseModelClient(ABC):
    """Contract for provider-specific document extraction AI clients."""

    @abstractmethod
    def create_document_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        prompt: str,
        document_bytes: bytes,
        cancel_token: CancellationToken | None = None,
    ) -> ModelResponse:
        """Send the prompt with the PDF attached and wait for the complete response.

        Raises:
            ExtractionNetworkError: on transport or provider API failures.
            ExtractionResponseError: when the response carries no text.
            ExtractionCancelledError: when ``cancel_token`` fires first.
        """
