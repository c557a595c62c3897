"""Authentication module."""

from valocoach.auth.identity import AuthError, AuthUser, AuthValidationError, IdentityClient

__all__ = ["AuthError", "AuthUser", "AuthValidationError", "IdentityClient"]
