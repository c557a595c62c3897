"""FastAPI dependency injection."""

from collections.abc import Callable
from functools import lru_cache

from fastapi import Header
from langchain_core.language_models import BaseChatModel
from supabase import Client

from valocoach.auth import AuthUser, IdentityClient
from valocoach.config import get_settings
from valocoach.core.generation import TextGenerator
from valocoach.llm import ChatModelGenerator, LLMProvider, create_llm_provider
from valocoach.store import ProfileStore, create_store_client


@lru_cache
def get_llm_provider() -> LLMProvider:
    """Get cached LLM provider instance."""
    settings = get_settings()
    return create_llm_provider(settings)


def get_chat_model() -> BaseChatModel:
    """Get LangChain chat model for dependency injection."""
    provider = get_llm_provider()
    return provider.get_chat_model()


@lru_cache
def get_text_generator() -> TextGenerator:
    """Get cached generator wrapping the configured chat model."""
    settings = get_settings()
    return ChatModelGenerator(
        get_chat_model(),
        context_window=settings.chat_context_window,
    )


@lru_cache
def get_supabase_client() -> Client | None:
    """Get cached anonymous Supabase client if configured."""
    settings = get_settings()
    if not settings.supabase_configured:
        return None
    return create_store_client(settings.supabase_url, settings.supabase_anon_key)


def bearer_token(authorization: str | None) -> str | None:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_request_user(
    authorization: str | None = Header(default=None),
) -> AuthUser | None:
    """Resolve the caller from its bearer token, None when anonymous."""
    token = bearer_token(authorization)
    client = get_supabase_client()
    if token is None or client is None:
        return None
    return await IdentityClient(client).get_user_for_token(token)


def get_profile_store_factory() -> Callable[[AuthUser], ProfileStore]:
    """Factory building a profile store that queries as the given user."""
    settings = get_settings()

    def factory(user: AuthUser) -> ProfileStore:
        client = create_store_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            access_token=user.access_token,
        )
        return ProfileStore(client)

    return factory
