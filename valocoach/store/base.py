"""Supabase client creation and shared query plumbing."""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from supabase import Client, create_client

logger = logging.getLogger(__name__)


class RecordStoreError(Exception):
    """A record store request failed."""


def create_store_client(url: str, key: str, access_token: str | None = None) -> Client:
    """Create a Supabase client.

    With an ``access_token`` the client queries as that user, so the store's
    row-level policies scope every read and write to the token's owner.
    """
    client = create_client(url, key)
    if access_token:
        client.postgrest.auth(access_token)
    return client


async def execute(query: Callable[[], Any], action: str) -> Any:
    """Run a blocking Supabase query off the event loop.

    Args:
        query: Zero-argument callable that builds and executes the request.
        action: Short description used in logs and errors.

    Returns:
        The response ``data`` payload, or None for an empty response.

    Raises:
        RecordStoreError: If the request fails for any reason.
    """
    try:
        response = await asyncio.to_thread(query)
    except Exception as e:
        logger.warning("Record store request failed (%s): %s", action, e)
        raise RecordStoreError(f"Failed to {action}: {e}") from e
    if response is None:
        return None
    return response.data


def first_row(data: Any) -> dict[str, Any] | None:
    """Single row out of an insert/upsert/select payload."""
    if isinstance(data, list):
        return data[0] if data else None
    return data
