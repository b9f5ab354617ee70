"""
Integration tests for the session authentication endpoints.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import pytest

from aloha.core.config import settings
from aloha.core.transaction import Transaction

from conftest import TEST_SESSION_ID, TEST_USER_ID


@pytest.fixture
async def alice(session_factory, user_repo):
    async with Transaction.begin(session_factory) as tx:
        return await user_repo.create(tx, "alice", "wonderland")


class TestLogin:
    @pytest.mark.anyio
    async def test_login_sets_session_cookie(self, anon_client, alice, redis_client):
        """
        Test successful login.

        Arrange: Existing user alice
        Act: POST /api/auth/login
        Assert: 200, identity in envelope, HTTP-only session cookie set
        """
        # Act
        response = await anon_client.post(
            "/api/auth/login", json={"username": "alice", "password": "wonderland"}
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body == {
            "data": {"user_id": str(alice.id), "username": "alice"},
            "pagination": None,
        }
        cookie_header = response.headers["set-cookie"]
        assert cookie_header.startswith(f"{settings.session_cookie_name}=")
        assert "HttpOnly" in cookie_header
        redis_client.set.assert_awaited_once()

    @pytest.mark.anyio
    async def test_unknown_user_is_bad_request(self, anon_client, session_factory):
        response = await anon_client.post(
            "/api/auth/login", json={"username": "nobody", "password": "x"}
        )

        assert response.status_code == 400
        assert response.json() == {"code": 400, "error": "User not found"}

    @pytest.mark.anyio
    async def test_wrong_password_is_unauthorized(self, anon_client, alice):
        response = await anon_client.post(
            "/api/auth/login", json={"username": "alice", "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["code"] == 401

    @pytest.mark.anyio
    async def test_missing_fields_rejected(self, anon_client, session_factory):
        response = await anon_client.post("/api/auth/login", json={"username": "alice"})

        assert response.status_code == 422


class TestSession:
    @pytest.mark.anyio
    async def test_me_returns_session_identity(self, client):
        response = await client.get("/api/auth/me")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "user_id": str(TEST_USER_ID),
            "username": "tester",
        }

    @pytest.mark.anyio
    async def test_me_without_cookie_is_unauthorized(self, anon_client):
        response = await anon_client.get("/api/auth/me")

        assert response.status_code == 401
        assert response.json() == {"code": 401, "error": "Not logged in"}

    @pytest.mark.anyio
    async def test_expired_session_is_unauthorized(self, client, redis_client):
        redis_client.get.return_value = None

        response = await client.get("/api/auth/me")

        assert response.status_code == 401

    @pytest.mark.anyio
    async def test_logout_deletes_session_and_cookie(self, client, redis_client):
        response = await client.post("/api/auth/logout")

        assert response.status_code == 204
        redis_client.delete.assert_awaited_once_with(f"session:{TEST_SESSION_ID}")
        assert f'{settings.session_cookie_name}=""' in response.headers["set-cookie"]
