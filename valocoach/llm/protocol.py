"""LLM provider protocol definition."""

from typing import Protocol, runtime_checkable

from langchain_core.language_models import BaseChatModel

# Sampling parameters are fixed for every provider and never user-configurable.
MAX_OUTPUT_TOKENS = 1000
TEMPERATURE = 0.7
TOP_P = 0.8
TOP_K = 40


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for LLM providers."""

    def get_chat_model(self) -> BaseChatModel:
        """Return a LangChain chat model instance."""
        ...

    @property
    def model_name(self) -> str:
        """Return the model name being used."""
        ...

    @property
    def provider_name(self) -> str:
        """Return the provider name (google, ollama, anthropic, openai)."""
        ...
