"""Example extraction client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ExtractorFactory.
"""

from collections import deque
from collections.abc import Iterable
from typing import ClassVar

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.client_base import BaseModelClient
from tradedocs.extraction.models import ModelResponse, TokenUsage


class ExampleClientAdapter(BaseModelClient):
    """Offline adapter that replays scripted responses.

    No network calls. Each call returns the next scripted response; once the
    script is exhausted (or when none was given) it returns an empty JSON
    object. Useful for local development, tests, and as a template for real
    provider adapters.
    """

    DEFAULT_RESPONSE: ClassVar[str] = "{}"

    def __init__(self, responses: Iterable[str] = ()) -> None:
        self._responses: deque[str] = deque(responses)

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
        _ = model, temperature, max_tokens, document_bytes
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
        raw_text = self._responses.popleft() if self._responses else self.DEFAULT_RESPONSE
        return ModelResponse(
            raw_text=raw_text,
            usage=TokenUsage(input=len(prompt.split()), output=len(raw_text.split())),
        )
