"""Process-wide authentication state shared with the presentation layer."""

import logging
from typing import Any

from valocoach.auth.identity import AuthUser, IdentityClient
from valocoach.core.observable import Observable
from valocoach.core.persona import greeting
from valocoach.store.base import RecordStoreError
from valocoach.store.profiles import ProfileStore, UserProfile

logger = logging.getLogger(__name__)


class AuthContext(Observable):
    """Holds the signed-in user and their profile.

    Constructed once and passed to the views that need it. ``start()``
    restores an existing auth session, ``sign_out()`` tears the state down.
    Observers receive the context itself on every change.
    """

    def __init__(self, identity: IdentityClient, profiles: ProfileStore | None = None):
        super().__init__()
        self.identity = identity
        self.profiles = profiles
        self.user: AuthUser | None = None
        self.profile: UserProfile | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    @property
    def greeting(self) -> str:
        name = self.profile.display_name if self.profile else None
        return greeting(name)

    async def start(self) -> None:
        """Restore the current user and load their profile."""
        self.user = await self.identity.get_current_user()
        await self.load_profile()
        self._notify(self)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        """Sign in and load the profile. Auth errors propagate."""
        self.user = await self.identity.sign_in(email, password)
        await self.load_profile()
        self._notify(self)
        return self.user

    async def sign_up(
        self, email: str, password: str, repeat_password: str, display_name: str
    ) -> AuthUser | None:
        """Register. The user is only signed in when the provider returns a session."""
        user = await self.identity.sign_up(email, password, repeat_password, display_name)
        if user is not None and user.access_token:
            self.user = user
            await self.load_profile()
            self._notify(self)
        return user

    async def sign_out(self) -> None:
        """Sign out and clear all user state."""
        try:
            await self.identity.sign_out()
        finally:
            self.user = None
            self.profile = None
            self._notify(self)

    async def load_profile(self) -> UserProfile | None:
        """Fetch the profile for the current user, best-effort."""
        if self.user is None or self.profiles is None:
            self.profile = None
            return None
        try:
            self.profile = await self.profiles.get_profile(self.user)
        except RecordStoreError:
            logger.warning("Could not load profile for user %s", self.user.id)
            self.profile = None
        return self.profile

    async def save_profile(self, updates: dict[str, Any]) -> UserProfile | None:
        """Upsert profile fields, best-effort. Returns the saved profile or None."""
        if self.user is None or self.profiles is None:
            return None
        try:
            self.profile = await self.profiles.update_profile(self.user, updates)
        except RecordStoreError:
            logger.warning("Could not save profile for user %s", self.user.id)
            return None
        self._notify(self)
        return self.profile
