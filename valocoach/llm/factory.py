"""LLM provider factory."""

from valocoach.config import Settings
from valocoach.llm.anthropic import AnthropicProvider
from valocoach.llm.custom_openai import CustomOpenAIProvider
from valocoach.llm.google import GoogleProvider
from valocoach.llm.ollama import OllamaProvider
from valocoach.llm.openai import OpenAIProvider
from valocoach.llm.protocol import LLMProvider


class LLMFactoryError(Exception):
    """Raised when LLM factory cannot create a provider."""


def create_llm_provider(settings: Settings) -> LLMProvider:
    """Create an LLM provider based on settings.

    Args:
        settings: Application settings containing provider configuration.

    Returns:
        Configured LLM provider instance.

    Raises:
        LLMFactoryError: If provider cannot be created due to missing config.
    """
    match settings.llm_provider:
        case "google":
            if not settings.google_api_key:
                raise LLMFactoryError(
                    "GOOGLE_API_KEY is required for Google provider"
                )
            return GoogleProvider(
                api_key=settings.google_api_key,
                model=settings.google_model,
            )

        case "ollama":
            return OllamaProvider(
                base_url=settings.ollama_base_url,
                model=settings.ollama_model,
            )

        case "anthropic":
            if not settings.anthropic_api_key:
                raise LLMFactoryError(
                    "ANTHROPIC_API_KEY is required for Anthropic provider"
                )
            return AnthropicProvider(
                api_key=settings.anthropic_api_key,
                model=settings.anthropic_model,
            )

        case "openai":
            if not settings.openai_api_key:
                raise LLMFactoryError(
                    "OPENAI_API_KEY is required for OpenAI provider"
                )
            return OpenAIProvider(
                api_key=settings.openai_api_key,
                model=settings.openai_model,
            )

        case "custom_openai":
            if not settings.custom_openai_api_key:
                raise LLMFactoryError(
                    "CUSTOM_OPENAI_API_KEY is required for custom OpenAI provider"
                )
            return CustomOpenAIProvider(
                api_key=settings.custom_openai_api_key,
                base_url=settings.custom_openai_base_url,
                model=settings.custom_openai_model,
                timeout=settings.custom_openai_timeout,
            )

        case _:
            raise LLMFactoryError(f"Unknown LLM provider: {settings.llm_provider}")
