"""OpenAI LLM provider."""

from dataclasses import dataclass

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from valocoach.llm.protocol import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_P


@dataclass
class OpenAIProvider:
    """OpenAI provider. The API has no top-k sampling."""

    api_key: str
    model: str = "gpt-4o"
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_OUTPUT_TOKENS
    top_p: float = TOP_P

    def get_chat_model(self) -> BaseChatModel:
        """Return OpenAI chat model."""
        return ChatOpenAI(
            api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
        )

    @property
    def model_name(self) -> str:
        return self.model

    @property
    def provider_name(self) -> str:
        return "openai"
