"""Chat sessions and messages in ``chat_sessions`` / ``chat_messages``."""

import logging
from datetime import datetime, timezone

from pydantic import BaseModel
from supabase import Client

from valocoach.auth.identity import AuthUser
from valocoach.core.messages import MessageRole
from valocoach.store.base import RecordStoreError, execute, first_row

logger = logging.getLogger(__name__)

SESSIONS_TABLE = "chat_sessions"
MESSAGES_TABLE = "chat_messages"

DEFAULT_SESSION_TITLE = "New Chat"


class ChatSession(BaseModel):
    """A persisted conversation thread."""

    id: str
    user_id: str
    title: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChatMessage(BaseModel):
    """A persisted message. Append-only."""

    id: str
    session_id: str
    role: MessageRole
    content: str
    created_at: datetime | None = None


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ChatHistoryStore:
    """Creates chat sessions and appends messages to them."""

    def __init__(self, client: Client):
        self._client = client

    async def create_session(
        self, user: AuthUser, title: str = DEFAULT_SESSION_TITLE
    ) -> ChatSession:
        """Create a chat session owned by ``user``."""
        now = _now()
        row = {"user_id": user.id, "title": title, "created_at": now, "updated_at": now}
        data = await execute(
            lambda: self._client.table(SESSIONS_TABLE).insert(row).execute(),
            "create chat session",
        )
        created = first_row(data)
        if not created:
            raise RecordStoreError("Chat session insert returned no row")
        logger.info("Created chat session %s for user %s", created["id"], user.id)
        return ChatSession.model_validate(created)

    async def save_message(
        self, session_id: str, role: MessageRole | str, content: str
    ) -> ChatMessage:
        """Append a message to a session."""
        row = {
            "session_id": session_id,
            "role": MessageRole(role).value,
            "content": content,
            "created_at": _now(),
        }
        data = await execute(
            lambda: self._client.table(MESSAGES_TABLE).insert(row).execute(),
            "save chat message",
        )
        saved = first_row(data)
        if not saved:
            raise RecordStoreError("Chat message insert returned no row")
        return ChatMessage.model_validate(saved)

    async def list_messages(self, session_id: str) -> list[ChatMessage]:
        """Messages of a session, oldest first."""
        data = await execute(
            lambda: self._client.table(MESSAGES_TABLE)
            .select("*")
            .eq("session_id", session_id)
            .order("created_at")
            .execute(),
            "load chat messages",
        )
        return [ChatMessage.model_validate(row) for row in data or []]

    async def list_sessions(self, user: AuthUser) -> list[ChatSession]:
        """Sessions owned by ``user``, most recently updated first."""
        data = await execute(
            lambda: self._client.table(SESSIONS_TABLE)
            .select("*")
            .eq("user_id", user.id)
            .order("updated_at", desc=True)
            .execute(),
            "load chat sessions",
        )
        return [ChatSession.model_validate(row) for row in data or []]
