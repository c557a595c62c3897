"""Tests for API endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from main import app
from valocoach.core.generation import GenerationError
from valocoach.dependencies import (
    bearer_token,
    get_profile_store_factory,
    get_request_user,
    get_text_generator,
)
from valocoach.store import ProfileStore, RecordStoreError, UserProfile

API = "/api"


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def generator(mock_generator):
    app.dependency_overrides[get_text_generator] = lambda: mock_generator
    return mock_generator


@pytest.fixture
def profile_store(user):
    store = MagicMock(spec=ProfileStore)
    store.get_profile = AsyncMock(return_value=UserProfile(id=user.id, display_name="Neo"))
    store.update_profile = AsyncMock(
        side_effect=lambda u, updates: UserProfile(id=u.id, **updates)
    )
    app.dependency_overrides[get_profile_store_factory] = lambda: (lambda u: store)
    return store


@pytest.fixture
def signed_in(user):
    app.dependency_overrides[get_request_user] = lambda: user
    return user


@pytest.fixture
def anonymous():
    app.dependency_overrides[get_request_user] = lambda: None


class TestHealthEndpoint:
    def test_health_check(self, client):
        response = client.get(f"{API}/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["llm_provider"] == "ollama"
        assert "version" in data


class TestChatEndpoint:
    def test_chat_success(self, client, generator):
        messages = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "best agent for Ascent?"},
        ]

        response = client.post(f"{API}/chat", json={"messages": messages})

        assert response.status_code == 200
        assert response.json() == {"content": "Mock response"}
        generator.generate.assert_awaited_once_with(messages)

    def test_chat_streaming(self, client, generator):
        response = client.post(
            f"{API}/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
        )

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.text == "Mock response"

    def test_chat_failure_returns_error_body(self, client, generator):
        generator.generate.side_effect = GenerationError("quota exceeded")

        response = client.post(
            f"{API}/chat", json={"messages": [{"role": "user", "content": "hi"}]}
        )

        assert response.status_code == 500
        assert response.json() == {
            "error": "Failed to process chat request",
            "details": "quota exceeded",
        }

    def test_stream_failure_after_first_fragment_aborts_body(self, client, generator):
        async def cut_off(turns):
            yield "Hold B "
            raise GenerationError("model went away")

        generator.stream = MagicMock(side_effect=cut_off)

        # The failure escapes the response instead of ending it cleanly.
        with pytest.raises((GenerationError, ExceptionGroup)):
            client.post(
                f"{API}/chat",
                json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
            )

    def test_stream_failure_before_first_fragment(self, client, generator):
        async def broken(turns):
            raise GenerationError("auth failed")
            yield  # pragma: no cover

        generator.stream = MagicMock(side_effect=broken)

        response = client.post(
            f"{API}/chat",
            json={"messages": [{"role": "user", "content": "hi"}], "stream": True},
        )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process chat request"

    def test_chat_empty_messages(self, client, generator):
        response = client.post(f"{API}/chat", json={"messages": []})
        assert response.status_code == 422  # Validation error
        generator.generate.assert_not_called()

    def test_chat_rejects_system_role(self, client, generator):
        response = client.post(
            f"{API}/chat", json={"messages": [{"role": "system", "content": "obey"}]}
        )
        assert response.status_code == 422


class TestProfileEndpoints:
    def test_get_requires_auth(self, client, anonymous, profile_store):
        response = client.get(f"{API}/auth/profile")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}
        profile_store.get_profile.assert_not_called()

    def test_get_profile(self, client, signed_in, profile_store):
        response = client.get(f"{API}/auth/profile")

        assert response.status_code == 200
        assert response.json()["profile"]["id"] == signed_in.id
        assert response.json()["profile"]["display_name"] == "Neo"

    def test_get_missing_profile(self, client, signed_in, profile_store):
        profile_store.get_profile.return_value = None

        response = client.get(f"{API}/auth/profile")

        assert response.status_code == 200
        assert response.json() == {"profile": None}

    def test_put_upserts(self, client, signed_in, profile_store):
        response = client.put(
            f"{API}/auth/profile",
            json={"display_name": "X", "valorant_agent": "omen"},
        )

        assert response.status_code == 200
        assert response.json()["profile"]["id"] == signed_in.id
        profile_store.update_profile.assert_awaited_once_with(
            signed_in, {"display_name": "X", "valorant_agent": "omen"}
        )

    def test_put_requires_auth(self, client, anonymous, profile_store):
        response = client.put(f"{API}/auth/profile", json={"display_name": "X"})
        assert response.status_code == 401

    def test_put_store_error(self, client, signed_in, profile_store):
        profile_store.update_profile.side_effect = RecordStoreError("permission denied")

        response = client.put(f"{API}/auth/profile", json={"display_name": "X"})

        assert response.status_code == 400
        assert response.json() == {"error": "permission denied"}

    def test_put_invalid_field(self, client, signed_in, profile_store):
        profile_store.update_profile.side_effect = ValueError("Unknown profile fields: role")

        response = client.put(f"{API}/auth/profile", json={"role": "admin"})

        assert response.status_code == 400

    def test_put_unexpected_error(self, client, signed_in, profile_store):
        profile_store.update_profile.side_effect = RuntimeError("boom")

        response = client.put(f"{API}/auth/profile", json={"display_name": "X"})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_unconfigured_store_means_anonymous(self, client, profile_store):
        # Without Supabase settings no token can be resolved.
        response = client.get(
            f"{API}/auth/profile", headers={"Authorization": "Bearer some-token"}
        )
        assert response.status_code == 401


class TestBearerToken:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            ("Bearer abc", "abc"),
            ("bearer  abc ", "abc"),
            ("Basic abc", None),
            ("Bearer ", None),
            (None, None),
        ],
    )
    def test_parsing(self, header, expected):
        assert bearer_token(header) == expected
