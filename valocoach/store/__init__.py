"""Record store clients backed by Supabase."""

from valocoach.store.base import RecordStoreError, create_store_client
from valocoach.store.history import ChatHistoryStore, ChatMessage, ChatSession
from valocoach.store.profiles import ProfileStore, UserProfile

__all__ = [
    "RecordStoreError",
    "create_store_client",
    "ChatHistoryStore",
    "ChatMessage",
    "ChatSession",
    "ProfileStore",
    "UserProfile",
]
