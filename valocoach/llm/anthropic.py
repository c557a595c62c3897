"""Anthropic Claude LLM provider."""

from dataclasses import dataclass

from langchain_anthropic import ChatAnthropic
from langchain_core.language_models import BaseChatModel

from valocoach.llm.protocol import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_K, TOP_P


@dataclass
class AnthropicProvider:
    """Anthropic Claude provider."""

    api_key: str
    model: str = "claude-sonnet-4-20250514"
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_OUTPUT_TOKENS
    top_p: float = TOP_P
    top_k: int = TOP_K

    def get_chat_model(self) -> BaseChatModel:
        """Return Anthropic chat model."""
        return ChatAnthropic(
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    @property
    def model_name(self) -> str:
        return self.model

    @property
    def provider_name(self) -> str:
        return "anthropic"
