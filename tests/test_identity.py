"""Tests for the identity provider client."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from valocoach.auth import AuthError, AuthUser, AuthValidationError, IdentityClient


def _auth_response(user_id="u-1", email="player@example.com", token="tok"):
    return SimpleNamespace(
        user=SimpleNamespace(id=user_id, email=email, user_metadata={"display_name": "Neo"}),
        session=SimpleNamespace(access_token=token) if token else None,
    )


@pytest.fixture
def client():
    return MagicMock()


class TestSignUp:
    @pytest.mark.asyncio
    async def test_password_mismatch_rejected_locally(self, client):
        identity = IdentityClient(client)

        with pytest.raises(AuthValidationError, match="Passwords do not match"):
            await identity.sign_up("player@example.com", "a", "b", "Neo")

        client.auth.sign_up.assert_not_called()

    @pytest.mark.asyncio
    async def test_missing_fields_rejected_locally(self, client):
        identity = IdentityClient(client)

        with pytest.raises(AuthValidationError):
            await identity.sign_up("", "secret", "secret", "Neo")
        with pytest.raises(AuthValidationError, match="Display name"):
            await identity.sign_up("player@example.com", "secret", "secret", "  ")

        client.auth.sign_up.assert_not_called()

    @pytest.mark.asyncio
    async def test_sends_display_name_and_redirect(self, client):
        client.auth.sign_up.return_value = _auth_response(token=None)
        identity = IdentityClient(client, signup_redirect_url="https://coach.example.com/")

        user = await identity.sign_up("player@example.com", "secret", "secret", "Neo")

        credentials = client.auth.sign_up.call_args.args[0]
        assert credentials["email"] == "player@example.com"
        assert credentials["options"] == {
            "data": {"display_name": "Neo"},
            "email_redirect_to": "https://coach.example.com/",
        }
        assert user.display_name == "Neo"
        assert user.access_token is None

    @pytest.mark.asyncio
    async def test_provider_error_surfaces_message(self, client):
        client.auth.sign_up.side_effect = Exception("User already registered")

        with pytest.raises(AuthError, match="User already registered"):
            await IdentityClient(client).sign_up("player@example.com", "secret", "secret", "Neo")


class TestSignIn:
    @pytest.mark.asyncio
    async def test_returns_user_with_token(self, client):
        client.auth.sign_in_with_password.return_value = _auth_response()

        user = await IdentityClient(client).sign_in("player@example.com", "secret")

        assert user == AuthUser(
            id="u-1", email="player@example.com", display_name="Neo", access_token="tok"
        )

    @pytest.mark.asyncio
    async def test_invalid_credentials(self, client):
        client.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

        with pytest.raises(AuthError, match="Invalid login credentials"):
            await IdentityClient(client).sign_in("player@example.com", "wrong")

    @pytest.mark.asyncio
    async def test_empty_credentials_rejected_locally(self, client):
        with pytest.raises(AuthValidationError):
            await IdentityClient(client).sign_in("", "")
        client.auth.sign_in_with_password.assert_not_called()


class TestSignOut:
    @pytest.mark.asyncio
    async def test_failure_raises(self, client):
        client.auth.sign_out.side_effect = Exception("network down")

        with pytest.raises(AuthError, match="network down"):
            await IdentityClient(client).sign_out()


class TestCurrentUser:
    @pytest.mark.asyncio
    async def test_no_session(self, client):
        client.auth.get_session.return_value = None

        assert await IdentityClient(client).get_current_user() is None
        client.auth.get_user.assert_not_called()

    @pytest.mark.asyncio
    async def test_restores_user(self, client):
        client.auth.get_session.return_value = SimpleNamespace(access_token="tok")
        client.auth.get_user.return_value = _auth_response()

        user = await IdentityClient(client).get_current_user()

        assert user.id == "u-1"
        client.auth.get_user.assert_called_once_with("tok")

    @pytest.mark.asyncio
    async def test_lookup_failure_counts_as_signed_out(self, client):
        client.auth.get_session.side_effect = Exception("expired")

        assert await IdentityClient(client).get_current_user() is None

    @pytest.mark.asyncio
    async def test_invalid_token(self, client):
        client.auth.get_user.side_effect = Exception("invalid JWT")

        assert await IdentityClient(client).get_user_for_token("bad") is None
