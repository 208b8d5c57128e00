from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    extraction_provider: str = "anthropic"
    extraction_temperature: float = 0.1
    extraction_max_tokens: int = 32000
    extraction_deadline_seconds: float | None = None

    anthropic_api_key: str = ""
    anthropic_model_name: str = "claude-sonnet-4-20250514"
    anthropic_timeout_seconds: int | None = None

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o"
    openai_timeout_seconds: int | None = None

    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_base_url: str = ""
    openai_compatible_timeout_seconds: int | None = None

    openrouter_api_key: str = ""
    openrouter_model_name: str = ""
    openrouter_timeout_seconds: int | None = None

    pdf_engine: str = "pdfplumber"
    max_file_size_bytes: int = 50 * 1024 * 1024

    output_dir: str = "output"
