"""Profile records in the ``profiles`` table."""

import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel
from supabase import Client

from valocoach.auth.identity import AuthUser
from valocoach.core.persona import find_agent, find_rank
from valocoach.store.base import RecordStoreError, execute, first_row

logger = logging.getLogger(__name__)

PROFILES_TABLE = "profiles"

EDITABLE_FIELDS = frozenset({"display_name", "avatar_url", "valorant_agent", "valorant_rank"})


class UserProfile(BaseModel):
    """A user's profile. ``id`` always equals the auth identity's id."""

    id: str
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None
    valorant_agent: str | None = None
    valorant_rank: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def validate_profile_updates(updates: dict[str, Any]) -> dict[str, Any]:
    """Check an update payload before it is sent to the store.

    ``id``, ``email`` and timestamps are owned by the store client and are
    dropped silently. Anything else outside the editable fields is rejected.
    """
    cleaned = {
        key: value
        for key, value in updates.items()
        if key not in {"id", "email", "created_at", "updated_at"}
    }
    unknown = set(cleaned) - EDITABLE_FIELDS
    if unknown:
        raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")

    agent = cleaned.get("valorant_agent")
    if agent is not None and find_agent(agent) is None:
        raise ValueError(f"Unknown agent: {agent}")
    rank = cleaned.get("valorant_rank")
    if rank is not None and find_rank(rank) is None:
        raise ValueError(f"Unknown rank: {rank}")
    return cleaned


class ProfileStore:
    """Reads and upserts the signed-in user's profile row."""

    def __init__(self, client: Client):
        self._client = client

    async def get_profile(self, user: AuthUser) -> UserProfile | None:
        """Fetch the profile for a user, None if it does not exist yet."""
        data = await execute(
            lambda: self._client.table(PROFILES_TABLE)
            .select("*")
            .eq("id", user.id)
            .limit(1)
            .execute(),
            "fetch profile",
        )
        row = first_row(data)
        return UserProfile.model_validate(row) if row else None

    async def update_profile(self, user: AuthUser, updates: dict[str, Any]) -> UserProfile:
        """Create or update the profile for a user.

        Raises:
            ValueError: If ``updates`` holds unknown fields or catalogue ids.
            RecordStoreError: If the upsert fails.
        """
        row = {
            **validate_profile_updates(updates),
            "id": user.id,
            "email": user.email,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        data = await execute(
            lambda: self._client.table(PROFILES_TABLE).upsert(row).execute(),
            "update profile",
        )
        saved = first_row(data)
        if not saved:
            raise RecordStoreError("Profile upsert returned no row")
        logger.debug("Profile saved for user %s", user.id)
        return UserProfile.model_validate(saved)
