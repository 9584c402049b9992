"""
Cuisinons - Configuration and settings.

Settings are read from the environment and `.env`. Nothing here is required at
import time: the LLM key and Supabase credentials are only checked when the
collaborator that needs them is first used.
"""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing. Not recoverable by callers."""


class Settings(BaseSettings):
    """Import pipeline settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # LLM (any OpenAI-compatible endpoint, e.g. OpenRouter via llm_base_url)
    openai_api_key: str | None = None
    llm_base_url: str | None = None
    llm_model: str = "gpt-4.1-mini"
    llm_max_tokens: int = 2000
    llm_temperature: float = 0.3

    # Supabase
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None

    # Application
    cuisinons_env: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # CUISINONS_LOG_PROMPTS=1 - write LLM prompts to prompt_logs/ (dev only)
    cuisinons_log_prompts: bool = False

    # Import pipeline
    import_timeout_seconds: float = 30.0  # Webpage fetch
    import_deadline_seconds: float = 120.0  # Whole import call, LLM included
    max_content_length: int = 10 * 1024 * 1024  # 10MB
    confidence_threshold: int = 60

    def require_openai_api_key(self) -> str:
        if not self.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set; LLM extraction is unavailable"
            )
        return self.openai_api_key


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class _SettingsProxy:
    """Lazy proxy for settings to avoid loading .env at import time."""

    _instance: Settings | None = None

    def __getattr__(self, name: str):
        if self._instance is None:
            self._instance = get_settings()
        return getattr(self._instance, name)


settings = _SettingsProxy()
