"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal, Self

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    env: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    app_name: str = "ValoCoach"
    app_version: str = "0.1.0"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # LLM Provider
    llm_provider: Literal["google", "ollama", "anthropic", "openai", "custom_openai"] = "ollama"

    # Google Gemini
    google_api_key: str | None = None
    google_model: str = "gemini-1.5-flash-latest"

    # Ollama
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.2"

    # Anthropic
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-sonnet-4-20250514"

    # OpenAI
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"

    # Custom OpenAI-compatible provider
    custom_openai_api_key: str | None = None
    custom_openai_base_url: str = "https://your-api-endpoint.com/v1"
    custom_openai_model: str = "your-model"
    custom_openai_timeout: int = 60

    # Chat
    chat_context_window: int = 40
    chat_api_url: str = "http://localhost:8000/api/chat"
    chat_timeout: float = 120.0
    chat_streaming: bool = False

    # Supabase (auth + record store)
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    signup_redirect_url: str | None = None

    # Profile editor
    profile_save_delay: float = 1.0

    @property
    def is_development(self) -> bool:
        return self.env == "development"

    @property
    def is_production(self) -> bool:
        return self.env == "production"

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_anon_key)

    @model_validator(mode="after")
    def validate_provider_config(self) -> Self:
        """Validate that required API keys are present for the selected provider."""
        if self.llm_provider == "google" and not self.google_api_key:
            raise ValueError(
                "GOOGLE_API_KEY is required when LLM_PROVIDER=google"
            )
        if self.llm_provider == "anthropic" and not self.anthropic_api_key:
            raise ValueError(
                "ANTHROPIC_API_KEY is required when LLM_PROVIDER=anthropic"
            )
        if self.llm_provider == "openai" and not self.openai_api_key:
            raise ValueError(
                "OPENAI_API_KEY is required when LLM_PROVIDER=openai"
            )
        if self.llm_provider == "custom_openai" and not self.custom_openai_api_key:
            raise ValueError(
                "CUSTOM_OPENAI_API_KEY is required when LLM_PROVIDER=custom_openai"
            )
        return self

    @model_validator(mode="after")
    def validate_supabase_config(self) -> Self:
        """Supabase URL and anon key must be set together."""
        if bool(self.supabase_url) != bool(self.supabase_anon_key):
            raise ValueError(
                "SUPABASE_URL and SUPABASE_ANON_KEY must be set together"
            )
        if self.chat_context_window < 0:
            raise ValueError("CHAT_CONTEXT_WINDOW must be >= 0")
        return self


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
