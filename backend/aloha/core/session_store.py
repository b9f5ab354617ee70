"""
Login session store backed by Redis.

Only the authentication flow writes here; CRUD operations never touch
sessions. Each session is a JSON document stored under
``session:<id>`` with a TTL.
"""

import json
import logging
import secrets
import uuid
from typing import Optional

import redis.asyncio as redis
from pydantic import BaseModel

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"


class SessionData(BaseModel):
    """Identity persisted after a successful login."""

    user_id: uuid.UUID
    username: str


class SessionStore:
    """
    Key-value session storage.

    Attributes:
        client: redis.asyncio client (decode_responses=True)
        ttl_seconds: Lifetime of each session
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int) -> "SessionStore":
        return cls(redis.from_url(url, decode_responses=True), ttl_seconds)

    @staticmethod
    def _key(session_id: str) -> str:
        return f"{SESSION_KEY_PREFIX}{session_id}"

    async def create(self, user_id: uuid.UUID, username: str) -> str:
        """
        Persist a new session and return its opaque id.

        Example:
            >>> session_id = await store.create(user.id, user.username)
        """
        session_id = secrets.token_urlsafe(32)
        payload = SessionData(user_id=user_id, username=username)
        await self.client.set(
            self._key(session_id),
            payload.model_dump_json(),
            ex=self.ttl_seconds,
        )
        logger.info("Session created", extra={"user_id": str(user_id)})
        return session_id

    async def get(self, session_id: str) -> Optional[SessionData]:
        """Return the session identity, or None if unknown or expired."""
        raw = await self.client.get(self._key(session_id))
        if raw is None:
            return None
        try:
            return SessionData.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValueError):
            logger.warning("Discarding malformed session payload")
            await self.client.delete(self._key(session_id))
            return None

    async def delete(self, session_id: str) -> bool:
        """Remove a session. Returns True if one existed."""
        removed = await self.client.delete(self._key(session_id))
        return bool(removed)

    async def ping(self) -> bool:
        try:
            return bool(await self.client.ping())
        except redis.RedisError as exc:
            logger.warning(f"Session store probe failed: {exc}")
            return False

    async def close(self) -> None:
        await self.client.aclose()
