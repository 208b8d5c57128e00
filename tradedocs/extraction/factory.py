from typing import ClassVar

from tradedocs.config.settings import Settings
from tradedocs.extraction.anthropic_client_adapter import AnthropicClientAdapter
from tradedocs.extraction.base import BaseExtractor
from tradedocs.extraction.client_base import BaseModelClient
from tradedocs.extraction.example_client_adapter import ExampleClientAdapter
from tradedocs.extraction.extractor import MultiPromptExtractor
from tradedocs.extraction.openai_client_adapter import OpenAIClientAdapter


class ExtractorFactory:
    """Creates the configured extractor with its provider client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
    }
    TOKEN_LIMIT_PARAMS: ClassVar[dict[str, str]] = {
        "openai": "max_completion_tokens",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractor:
        """Create a configured extractor from application settings."""
        provider = settings.extraction_provider.lower()
        if provider == "example":
            return MultiPromptExtractor(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
            )
        return MultiPromptExtractor(
            client=cls._create_client(provider, settings),
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.extraction_temperature,
            max_tokens=settings.extraction_max_tokens,
        )

    @classmethod
    def _create_client(cls, provider: str, settings: Settings) -> BaseModelClient:
        if provider == "anthropic":
            return AnthropicClientAdapter(
                api_key=settings.anthropic_api_key,
                timeout_seconds=settings.anthropic_timeout_seconds,
            )
        return OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
            token_limit_param=cls.TOKEN_LIMIT_PARAMS.get(provider, "max_tokens"),
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "anthropic",
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.openai_api_key,
            "openai_compatible": settings.openai_compatible_api_key,
            "openrouter": settings.openrouter_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "anthropic": settings.anthropic_model_name,
            "openai": settings.openai_model_name,
            "openai_compatible": settings.openai_compatible_model_name,
            "openrouter": settings.openrouter_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int | None:
        key_map = {
            "openai": settings.openai_timeout_seconds,
            "openai_compatible": settings.openai_compatible_timeout_seconds,
            "openrouter": settings.openrouter_timeout_seconds,
        }
        return key_map.get(provider)
