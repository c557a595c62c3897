"""Identity provider client on top of Supabase Auth."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from supabase import Client

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """An authentication action failed. ``str(error)`` is shown to the user."""


class AuthValidationError(AuthError):
    """Input was rejected locally, before any network call."""


@dataclass(frozen=True)
class AuthUser:
    """The authenticated identity."""

    id: str
    email: str | None = None
    display_name: str | None = None
    access_token: str | None = None

    @classmethod
    def from_supabase(cls, user: Any, access_token: str | None = None) -> "AuthUser":
        metadata = getattr(user, "user_metadata", None) or {}
        return cls(
            id=str(user.id),
            email=getattr(user, "email", None),
            display_name=metadata.get("display_name"),
            access_token=access_token,
        )


def _message(error: Exception) -> str:
    return str(error) or "An error occurred"


class IdentityClient:
    """Sign-up, sign-in, sign-out and current-user lookups.

    Sign-up and sign-in failures are raised as :class:`AuthError` with a
    human-readable message; they are never swallowed here.

    Example:
        identity = IdentityClient(create_store_client(url, key))
        user = await identity.sign_in("player@example.com", "secret")
    """

    def __init__(self, client: Client, signup_redirect_url: str | None = None):
        """Initialize the identity client.

        Args:
            client: Supabase client whose ``auth`` API is used.
            signup_redirect_url: Where the confirmation e-mail link lands.
        """
        self._client = client
        self.signup_redirect_url = signup_redirect_url

    async def sign_up(
        self,
        email: str,
        password: str,
        repeat_password: str,
        display_name: str,
    ) -> AuthUser | None:
        """Register a new account.

        Returns:
            The new user, or None while e-mail confirmation is pending and
            the provider returns no user.

        Raises:
            AuthValidationError: Missing fields or mismatched passwords.
            AuthError: The auth service rejected the request.
        """
        if not email or not password:
            raise AuthValidationError("Email and password are required")
        if not display_name.strip():
            raise AuthValidationError("Display name is required")
        if password != repeat_password:
            raise AuthValidationError("Passwords do not match")

        options: dict[str, Any] = {"data": {"display_name": display_name.strip()}}
        if self.signup_redirect_url:
            options["email_redirect_to"] = self.signup_redirect_url

        try:
            response = await asyncio.to_thread(
                self._client.auth.sign_up,
                {"email": email, "password": password, "options": options},
            )
        except Exception as e:
            logger.info("Sign-up failed for %s: %s", email, e)
            raise AuthError(_message(e)) from e

        if response is None or response.user is None:
            return None
        token = response.session.access_token if response.session else None
        logger.info("Registered user %s", response.user.id)
        return AuthUser.from_supabase(response.user, token)

    async def sign_in(self, email: str, password: str) -> AuthUser:
        """Sign in with e-mail and password."""
        if not email or not password:
            raise AuthValidationError("Email and password are required")
        try:
            response = await asyncio.to_thread(
                self._client.auth.sign_in_with_password,
                {"email": email, "password": password},
            )
        except Exception as e:
            logger.info("Sign-in failed for %s: %s", email, e)
            raise AuthError(_message(e)) from e

        if response is None or response.user is None:
            raise AuthError("Invalid login credentials")
        token = response.session.access_token if response.session else None
        logger.info("User %s signed in", response.user.id)
        return AuthUser.from_supabase(response.user, token)

    async def sign_out(self) -> None:
        """End the current auth session."""
        try:
            await asyncio.to_thread(self._client.auth.sign_out)
        except Exception as e:
            raise AuthError(_message(e)) from e

    async def get_current_user(self) -> AuthUser | None:
        """The signed-in user, or None. Lookup failures count as signed out."""
        try:
            session = await asyncio.to_thread(self._client.auth.get_session)
            if session is None:
                return None
            response = await asyncio.to_thread(
                self._client.auth.get_user, session.access_token
            )
        except Exception as e:
            logger.warning("Current user lookup failed: %s", e)
            return None
        if response is None or response.user is None:
            return None
        return AuthUser.from_supabase(response.user, session.access_token)

    async def get_user_for_token(self, access_token: str) -> AuthUser | None:
        """Resolve a bearer token to its user, None when it is not valid."""
        try:
            response = await asyncio.to_thread(self._client.auth.get_user, access_token)
        except Exception as e:
            logger.info("Token lookup failed: %s", e)
            return None
        if response is None or response.user is None:
            return None
        return AuthUser.from_supabase(response.user, access_token)
