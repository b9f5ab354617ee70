"""
Unit tests for the Redis-backed session store.

The Redis client is mocked; no server is needed.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
import redis.asyncio as redis

from aloha.core.session_store import SessionData, SessionStore


@pytest.fixture
def client():
    return AsyncMock()


@pytest.fixture
def store(client):
    return SessionStore(client, ttl_seconds=120)


class TestSessionStore:
    @pytest.mark.anyio
    async def test_create_writes_payload_with_ttl(self, store, client):
        user_id = uuid.uuid4()

        session_id = await store.create(user_id, "alice")

        assert len(session_id) >= 32
        key, payload = client.set.call_args.args
        assert key == f"session:{session_id}"
        assert SessionData.model_validate_json(payload) == SessionData(
            user_id=user_id, username="alice"
        )
        assert client.set.call_args.kwargs == {"ex": 120}

    @pytest.mark.anyio
    async def test_create_ids_are_unique(self, store):
        ids = {await store.create(uuid.uuid4(), "u") for _ in range(5)}

        assert len(ids) == 5

    @pytest.mark.anyio
    async def test_get_returns_identity(self, store, client):
        user_id = uuid.uuid4()
        client.get.return_value = SessionData(user_id=user_id, username="alice").model_dump_json()

        session = await store.get("abc")

        client.get.assert_awaited_once_with("session:abc")
        assert session.user_id == user_id

    @pytest.mark.anyio
    async def test_get_unknown_session(self, store, client):
        client.get.return_value = None

        assert await store.get("missing") is None

    @pytest.mark.anyio
    async def test_malformed_payload_is_discarded(self, store, client):
        client.get.return_value = "{not json"

        assert await store.get("abc") is None
        client.delete.assert_awaited_once_with("session:abc")

    @pytest.mark.anyio
    async def test_delete_reports_existence(self, store, client):
        client.delete.return_value = 0

        assert await store.delete("abc") is False

    @pytest.mark.anyio
    async def test_ping_failure_is_false(self, store, client):
        client.ping.side_effect = redis.ConnectionError("refused")

        assert await store.ping() is False

    @pytest.mark.anyio
    async def test_close_releases_client(self, store, client):
        await store.close()

        client.aclose.assert_awaited_once()
