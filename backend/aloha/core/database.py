"""
Database configuration and session management.

Provides the SQLAlchemy async engine, the session factory backing every
Transaction, and lifecycle helpers for application startup/shutdown.
"""

import asyncio
import logging

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from aloha.core.config import Settings, settings
from aloha.models.base import Base

logger = logging.getLogger(__name__)


def get_async_engine(config: Settings = settings) -> AsyncEngine:
    """
    Create and configure the async SQLAlchemy engine.

    For SQLite:
    - In-memory databases use StaticPool (the database lives inside a
      single connection, so every session must share it)
    - File databases keep the default pool so each transaction gets its
      own connection, and run in WAL mode
    - Enables check_same_thread=False for async compatibility
    - Turns on foreign key enforcement for every connection

    For PostgreSQL:
    - Bounded pool (pool_size + max_overflow)
    - Short acquisition timeout so requests fail fast when the pool
      is exhausted instead of queueing indefinitely

    Returns:
        Configured AsyncEngine instance
    """
    if config.is_sqlite:
        in_memory = config.is_sqlite_memory
        engine_kwargs: dict = {
            "echo": False,
            "connect_args": {"check_same_thread": False},
        }
        # Sharing one connection across sessions is only safe for :memory:
        if in_memory:
            engine_kwargs["poolclass"] = StaticPool

        engine = create_async_engine(config.database_url, **engine_kwargs)

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record):  # noqa: ANN001
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not in_memory:
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        return engine

    return create_async_engine(
        config.database_url,
        echo=False,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
    )


# Global async engine instance, created once per process.
engine = get_async_engine()


# Session factory backing Transaction.begin().
async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def init_db() -> None:
    """
    Initialize the database.

    Tables are only created when DB_CREATE_ALL is enabled; production
    schemas are managed outside the application.
    """
    from aloha import models  # noqa: F401

    if not settings.db_create_all:
        return

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"dialect": engine.dialect.name})


async def close_db() -> None:
    """Dispose of all pooled connections at shutdown."""
    await engine.dispose()


async def check_database(
    session_factory: async_sessionmaker[AsyncSession] = async_session_maker,
    timeout_seconds: float = 2.0,
) -> bool:
    """
    Check database connectivity.

    Executes ``SELECT 1`` with a timeout so an unreachable store cannot
    hang the readiness probe.

    Returns:
        True if database is reachable and healthy, False otherwise
    """
    try:
        async with asyncio.timeout(timeout_seconds):
            async with session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()
                return True
    except asyncio.TimeoutError:
        logger.warning("Database probe timed out")
        return False
    except Exception as exc:
        logger.warning(f"Database probe failed: {exc}")
        return False
