"""Custom OpenAI-compatible LLM provider."""

from dataclasses import dataclass

from langchain_core.language_models import BaseChatModel
from langchain_openai import ChatOpenAI

from valocoach.llm.protocol import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_P


@dataclass
class CustomOpenAIProvider:
    """Provider for custom OpenAI-compatible API endpoints."""

    api_key: str
    base_url: str
    model: str
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_OUTPUT_TOKENS
    top_p: float = TOP_P
    timeout: int = 60

    def get_chat_model(self) -> BaseChatModel:
        """Return a LangChain chat model.

        Retries are disabled: a failed generation surfaces once and the
        user resubmits.
        """
        return ChatOpenAI(
            api_key=self.api_key,
            base_url=self.base_url,
            model=self.model,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
            top_p=self.top_p,
            timeout=self.timeout,
            max_retries=0,
        )

    @property
    def model_name(self) -> str:
        return self.model

    @property
    def provider_name(self) -> str:
        return "custom_openai"
