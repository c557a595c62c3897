"""Google Gemini LLM provider."""

from dataclasses import dataclass

from langchain_core.language_models import BaseChatModel
from langchain_google_genai import ChatGoogleGenerativeAI

from valocoach.llm.protocol import MAX_OUTPUT_TOKENS, TEMPERATURE, TOP_K, TOP_P


@dataclass
class GoogleProvider:
    """Google Gemini provider."""

    api_key: str
    model: str = "gemini-1.5-flash-latest"
    temperature: float = TEMPERATURE
    max_tokens: int = MAX_OUTPUT_TOKENS
    top_p: float = TOP_P
    top_k: int = TOP_K

    def get_chat_model(self) -> BaseChatModel:
        """Return Gemini chat model."""
        return ChatGoogleGenerativeAI(
            google_api_key=self.api_key,
            model=self.model,
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
            top_p=self.top_p,
            top_k=self.top_k,
        )

    @property
    def model_name(self) -> str:
        return self.model

    @property
    def provider_name(self) -> str:
        return "google"
