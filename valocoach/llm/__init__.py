"""LLM provider module."""

from valocoach.llm.anthropic import AnthropicProvider
from valocoach.llm.custom_openai import CustomOpenAIProvider
from valocoach.llm.factory import LLMFactoryError, create_llm_provider
from valocoach.llm.generator import ChatModelGenerator
from valocoach.llm.google import GoogleProvider
from valocoach.llm.ollama import OllamaProvider
from valocoach.llm.openai import OpenAIProvider
from valocoach.llm.protocol import LLMProvider

__all__ = [
    "LLMProvider",
    "create_llm_provider",
    "LLMFactoryError",
    "ChatModelGenerator",
    "GoogleProvider",
    "OllamaProvider",
    "AnthropicProvider",
    "OpenAIProvider",
    "CustomOpenAIProvider",
]
