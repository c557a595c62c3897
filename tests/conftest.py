"""Shared test fixtures."""

from collections.abc import AsyncIterator, Iterable
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest

from valocoach.auth import AuthUser, IdentityClient
from valocoach.auth.context import AuthContext
from valocoach.config import Settings, get_settings
from valocoach.store import ChatHistoryStore, ChatSession


@pytest.fixture(autouse=True)
def reset_cached_dependencies():
    """Clear cached settings and clients so tests don't leak configuration."""
    from valocoach import dependencies

    caches = [
        get_settings,
        dependencies.get_llm_provider,
        dependencies.get_text_generator,
        dependencies.get_supabase_client,
    ]
    for cached in caches:
        cached.cache_clear()
    yield
    for cached in caches:
        cached.cache_clear()


# Settings Fixtures

@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return Settings(
        env="development",
        debug=True,
        llm_provider="ollama",
        ollama_base_url="http://localhost:11434",
        ollama_model="llama3.2",
    )


# Identity Fixtures

@pytest.fixture
def user() -> AuthUser:
    return AuthUser(
        id="0b6f1c9e-user",
        email="player@example.com",
        display_name="Neo",
        access_token="token-123",
    )


@pytest.fixture
def signed_in_auth(user: AuthUser) -> AuthContext:
    """Auth context with a signed-in user and mocked collaborators."""
    auth = AuthContext(MagicMock(spec=IdentityClient))
    auth.user = user
    return auth


# Generation Mocks

async def fragments(items: Iterable[str]) -> AsyncIterator[str]:
    """Async iterator over text fragments, as a streaming generator yields them."""
    for item in items:
        yield item


@pytest.fixture
def mock_generator() -> MagicMock:
    """Text generator replying with a fixed text."""
    generator = MagicMock()
    generator.generate = AsyncMock(return_value="Mock response")
    generator.stream = MagicMock(side_effect=lambda turns: fragments(["Mock ", "response"]))
    return generator


# Record Store Mocks

@pytest.fixture
def chat_session(user: AuthUser) -> ChatSession:
    return ChatSession(id="session-1", user_id=user.id, title="New Chat")


@pytest.fixture
def mock_history(chat_session: ChatSession) -> MagicMock:
    """Chat history store that accepts every write."""
    history = MagicMock(spec=ChatHistoryStore)
    history.create_session = AsyncMock(return_value=chat_session)
    history.save_message = AsyncMock()
    return history


def store_response(data) -> SimpleNamespace:
    """Shape of a Supabase ``execute()`` result."""
    return SimpleNamespace(data=data)


@pytest.fixture
def supabase_client() -> MagicMock:
    """Supabase client mock. Query builders return themselves so chains resolve."""
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "limit", "order", "insert", "upsert"):
        getattr(query, method).return_value = query
    query.execute.return_value = store_response([])
    client.table.return_value = query
    client.query = query
    return client
