import base64
import time

import httpx
import openai

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.client_base import BaseModelClient
from tradedocs.extraction.exceptions import (
    ExtractionCancelledError,
    ExtractionNetworkError,
    ExtractionResponseError,
)
from tradedocs.extraction.models import ModelResponse, TokenUsage


class OpenAIClientAdapter(BaseModelClient):
    """Extraction client built on OpenAI-compatible chat API with inline PDF file parts.

    The official API takes the output limit as ``max_completion_tokens`` (newer
    models reject ``max_tokens``); most compatible gateways still expect
    ``max_tokens``, so the parameter name is chosen per provider.
    """

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int | None = None,
        base_url: str | None = None,
        token_limit_param: str = "max_tokens",
    ) -> None:
        self._timeout_seconds = timeout_seconds
        self._token_limit_param = token_limit_param
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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

        encoded = base64.standard_b64encode(document_bytes).decode("utf-8")
        started = time.perf_counter()
        try:
            response = client.chat.completions.create(
                model=model,
                temperature=temperature,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {"type": "text", "text": prompt},
                            {
                                "type": "file",
                                "file": {
                                    "filename": "document.pdf",
                                    "file_data": f"data:application/pdf;base64,{encoded}",
                                },
                            },
                        ],
                    }
                ],
                **{self._token_limit_param: max_tokens},
            )
        except (openai.APITimeoutError, httpx.TimeoutException) as exc:
            if cancel_token is not None and cancel_token.cancelled:
                raise ExtractionCancelledError("Extraction deadline exceeded") from exc
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionResponseError("AI returned empty response")

        usage = response.usage
        return ModelResponse(
            raw_text=content,
            usage=TokenUsage(
                input=usage.prompt_tokens if usage is not None else 0,
                output=usage.completion_tokens if usage is not None else 0,
            ),
            wall_clock_ms=int((time.perf_counter() - started) * 1000),
        )
