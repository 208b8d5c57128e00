from unittest.mock import MagicMock, patch

import httpx
import openai
import pytest

from tradedocs.extraction.cancellation import CancellationToken
from tradedocs.extraction.exceptions import (
    ExtractionCancelledError,
    ExtractionNetworkError,
    ExtractionResponseError,
)
from tradedocs.extraction.openai_client_adapter import OpenAIClientAdapter


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    response.usage.prompt_tokens = 50
    response.usage.completion_tokens = 8
    return response


def _make_adapter(
    mock_client: MagicMock,
    timeout_seconds: int | None = 30,
    token_limit_param: str = "max_tokens",
) -> OpenAIClientAdapter:
    with patch(
        "tradedocs.extraction.openai_client_adapter.openai.OpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(
            api_key="k",
            timeout_seconds=timeout_seconds,
            base_url=None,
            token_limit_param=token_limit_param,
        )


def _complete(adapter: OpenAIClientAdapter, **overrides: object):  # type: ignore[no-untyped-def]
    kwargs: dict[str, object] = {
        "model": "m",
        "temperature": 0.1,
        "max_tokens": 32000,
        "prompt": "Extract",
        "document_bytes": b"%PDF-1.4",
    }
    kwargs.update(overrides)
    return adapter.create_document_completion(**kwargs)  # type: ignore[arg-type]


class TestOpenAIClientAdapter:
    def test_returns_content_and_usage(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response('{"ok": true}')
        response = _complete(_make_adapter(mock_client))
        assert response.raw_text == '{"ok": true}'
        assert response.usage.input == 50
        assert response.usage.output == 8

    def test_sends_pdf_as_file_part(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        _complete(_make_adapter(mock_client))
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_tokens"] == 32000
        content = kwargs["messages"][0]["content"]
        assert content[0] == {"type": "text", "text": "Extract"}
        assert content[1]["type"] == "file"
        assert content[1]["file"]["file_data"].startswith("data:application/pdf;base64,")

    def test_deadline_shorter_than_timeout_narrows_it(self) -> None:
        mock_client = MagicMock()
        narrowed = mock_client.with_options.return_value
        narrowed.chat.completions.create.return_value = _make_mock_response("{}")
        token = CancellationToken(deadline_seconds=10)
        _complete(_make_adapter(mock_client, timeout_seconds=30), cancel_token=token)
        timeout = mock_client.with_options.call_args.kwargs["timeout"]
        assert 0 < timeout <= 10
        mock_client.chat.completions.create.assert_not_called()

    def test_deadline_longer_than_timeout_keeps_configured_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        token = CancellationToken(deadline_seconds=600)
        _complete(_make_adapter(mock_client, timeout_seconds=30), cancel_token=token)
        mock_client.with_options.assert_not_called()
        mock_client.chat.completions.create.assert_called_once()

    def test_deadline_applies_when_no_timeout_configured(self) -> None:
        mock_client = MagicMock()
        narrowed = mock_client.with_options.return_value
        narrowed.chat.completions.create.return_value = _make_mock_response("{}")
        token = CancellationToken(deadline_seconds=600)
        _complete(_make_adapter(mock_client, timeout_seconds=None), cancel_token=token)
        timeout = mock_client.with_options.call_args.kwargs["timeout"]
        assert 0 < timeout <= 600

    def test_sends_max_completion_tokens_when_configured(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response("{}")
        adapter = _make_adapter(mock_client, token_limit_param="max_completion_tokens")
        _complete(adapter, max_tokens=4000)
        kwargs = mock_client.chat.completions.create.call_args.kwargs
        assert kwargs["max_completion_tokens"] == 4000
        assert "max_tokens" not in kwargs

    def test_raises_error_for_empty_content(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.return_value = _make_mock_response(None)
        with pytest.raises(ExtractionResponseError, match="empty response"):
            _complete(_make_adapter(mock_client))

    def test_raises_error_for_no_choices(self) -> None:
        mock_client = MagicMock()
        response = _make_mock_response("{}")
        response.choices = []
        mock_client.chat.completions.create.return_value = response
        with pytest.raises(ExtractionResponseError, match="no choices"):
            _complete(_make_adapter(mock_client))

    def test_raises_network_error_on_connection_failure(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIConnectionError(
            request=MagicMock()
        )
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _complete(_make_adapter(mock_client))

    def test_raises_network_error_on_timeout(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = httpx.TimeoutException("timeout")
        with pytest.raises(ExtractionNetworkError, match="network error"):
            _complete(_make_adapter(mock_client))

    def test_raises_network_error_on_api_error(self) -> None:
        mock_client = MagicMock()
        mock_client.chat.completions.create.side_effect = openai.APIError(
            message="server error",
            request=MagicMock(),
            body=None,
        )
        with pytest.raises(ExtractionNetworkError, match="API error"):
            _complete(_make_adapter(mock_client))

    def test_sdk_timeout_after_deadline_is_cancellation(self) -> None:
        mock_client = MagicMock()
        token = CancellationToken(deadline_seconds=5)

        def expire(**_kwargs: object) -> None:
            token.cancel()
            raise openai.APITimeoutError(request=MagicMock())

        mock_client.with_options.return_value.chat.completions.create.side_effect = expire
        with pytest.raises(ExtractionCancelledError):
            _complete(_make_adapter(mock_client), cancel_token=token)

    def test_cancelled_token_skips_call(self) -> None:
        mock_client = MagicMock()
        token = CancellationToken()
        token.cancel()
        with pytest.raises(ExtractionCancelledError):
            _complete(_make_adapter(mock_client), cancel_token=token)
        mock_client.chat.completions.create.assert_not_called()
