"""
Pytest configuration and shared fixtures.

This module provides:
- Environment variable setup for tests
- An in-memory database with fresh tables per test
- Repositories bound to test collection URLs
- A session store over a mocked Redis client
- HTTP clients wired to the test database and session store
"""

import os
import sys
import uuid
from pathlib import Path
from unittest.mock import AsyncMock

import pytest


# Set test environment variables BEFORE any imports
# This must happen first to ensure settings load with test values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["BASE_URL"] = "http://test"
os.environ["REDIS_URL"] = "redis://localhost:6379/15"
os.environ["LOG_JSON"] = "false"
os.environ["DB_CREATE_ALL"] = "false"

# Add backend directory to path
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from aloha.schemas.pagination import PageLinks  # noqa: E402

TEST_SESSION_ID = "test-session-id"
TEST_USER_ID = uuid.UUID("00000000-0000-4000-8000-000000000001")


@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for async tests.

    Returns:
        str: Backend name ("asyncio")
    """
    return "asyncio"


@pytest.fixture(scope="function")
async def session_factory():
    """
    Provide the session factory over a freshly created schema.

    Creates tables before the test and drops them after.
    """
    from aloha.core.database import async_session_maker, engine
    from aloha.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_session_maker

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


def _links(segment: str) -> PageLinks:
    return PageLinks(collection_url=f"http://test/api/{segment}")


@pytest.fixture
def user_repo():
    from aloha.repositories import UserRepository
    return UserRepository(_links("users"))


@pytest.fixture
def group_repo():
    from aloha.repositories import UserGroupRepository
    return UserGroupRepository(_links("user_groups"))


@pytest.fixture
def permission_repo():
    from aloha.repositories import PermissionRepository
    return PermissionRepository(_links("permissions"))


@pytest.fixture
def group_permission_repo():
    from aloha.repositories import GroupPermissionRepository
    return GroupPermissionRepository(_links("group_permissions"))


@pytest.fixture
def user_permission_repo():
    from aloha.repositories import UserPermissionRepository
    return UserPermissionRepository(_links("user_permissions"))


@pytest.fixture
def content_repo():
    from aloha.repositories import ContentRepository
    return ContentRepository(_links("contents"))


@pytest.fixture
def redis_client():
    """
    Mocked redis.asyncio client.

    ``get`` answers every key with a valid session for TEST_USER_ID.
    """
    from aloha.core.session_store import SessionData

    client = AsyncMock()
    client.get.return_value = SessionData(
        user_id=TEST_USER_ID, username="tester"
    ).model_dump_json()
    client.set.return_value = True
    client.delete.return_value = 1
    client.ping.return_value = True
    return client


@pytest.fixture
def session_store(redis_client):
    from aloha.core.session_store import SessionStore
    return SessionStore(redis_client, ttl_seconds=60)


@pytest.fixture
async def anon_client(session_factory, session_store):
    """
    HTTP client without a session cookie.

    The app's transaction dependency uses the test schema and its
    session store dependency the mocked store.
    """
    from httpx import ASGITransport, AsyncClient

    from aloha.api.dependencies import get_session_factory, get_session_store
    from aloha.main import app

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_session_store] = lambda: session_store

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
async def client(anon_client):
    """HTTP client carrying a session cookie the mocked store accepts."""
    from aloha.core.config import settings

    anon_client.cookies.set(settings.session_cookie_name, TEST_SESSION_ID)
    yield anon_client
