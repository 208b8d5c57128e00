import base64
import time

import anthropic
import httpx

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.client_base import BaseModelClient
from tradedocs.extraction.exceptions import (
    ExtractionCancelledError,
    ExtractionNetworkError,
    ExtractionResponseError,
)
from tradedocs.extraction.models import ModelResponse, TokenUsage


class AnthropicClientAdapter(BaseModelClient):
    """Extraction client built on the Anthropic Messages API with PDF document blocks.

    The response is streamed so long extractions stay within the SDK limits and
    so the cancellation token can be checked between chunks; callers only ever
    see the final message. A token deadline also caps the request timeout, so a
    provider that stalls before or between chunks cannot outlive the deadline.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int | None = None,
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout_seconds)

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
        client = self._client
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()
            timeout = cancel_token.narrow_timeout(self._timeout_seconds)
            if timeout != self._timeout_seconds:
                client = client.with_options(timeout=timeout)

        started = time.perf_counter()
        try:
            with client.messages.stream(
                model=model,
                max_tokens=max_tokens,
                temperature=temperature,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "document",
                                "source": {
                                    "type": "base64",
                                    "media_type": "application/pdf",
                                    "data": base64.standard_b64encode(document_bytes).decode(
                                        "utf-8"
                                    ),
                                },
                            },
                        ],
                    }
                ],
            ) as stream:
                for _ in stream.text_stream:
                    if cancel_token is not None:
                        cancel_token.raise_if_cancelled()
                message = stream.get_final_message()
        except (anthropic.APITimeoutError, httpx.TimeoutException) as exc:
            if cancel_token is not None and cancel_token.cancelled:
                raise ExtractionCancelledError("Extraction deadline exceeded") from exc
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except (anthropic.APIConnectionError, httpx.ConnectError) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except anthropic.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not message.content:
            raise ExtractionResponseError("AI returned no content")
        block = message.content[0]
        if block.type != "text":
            raise ExtractionResponseError(f"Unexpected response block type: {block.type}")

        usage = message.usage
        return ModelResponse(
            raw_text=block.text,
            usage=TokenUsage(
                input=(usage.input_tokens or 0) if usage is not None else 0,
                output=(usage.output_tokens or 0) if usage is not None else 0,
            ),
            wall_clock_ms=int((time.perf_counter() - started) * 1000),
        )
