"""Ollama LLM provider for local development."""

from dataclasses import dataclass

from langchain_core.language_models import BaseChatModel
from langchain_ollama import ChatOllama

from valocoach.llm.protocol import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_K, TOP_P


@dataclass
class OllamaProvider:
    """Ollama provider for local LLM inference."""

    base_url: str
    model: str
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_OUTPUT_TOKENS
    top_p: float = TOP_P
    top_k: int = TOP_K

    def get_chat_model(self) -> BaseChatModel:
        """Return Ollama chat model."""
        return ChatOllama(
            base_url=self.base_url,
            model=self.model,
            temperature=self.temperature,
            num_predict=self.max_tokens,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    @property
    def model_name(self) -> str:
        return self.model

    @property
    def provider_name(self) -> str:
        return "ollama"
