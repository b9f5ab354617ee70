"""
Owned transaction handle.

A Transaction wraps a single AsyncSession transaction and enforces the
ownership discipline of the data-access layer:

- Read-only operations borrow the handle. They may issue any number of
  SELECTs and never commit, so a caller can compose several reads in
  one transaction.
- Mutating operations consume the handle through ``consume()``. On
  success the transaction is committed exactly once; on any error it is
  rolled back. Either way the handle is closed afterwards and every
  further use raises TransactionClosedError.
- A handle opened with ``begin()`` that was never committed is rolled
  back when the block exits. Entities it returned remain readable.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from aloha.core.exceptions import TransactionClosedError

logger = logging.getLogger(__name__)

OPEN = "open"
COMMITTED = "committed"
ROLLED_BACK = "rolled_back"


class Transaction:
    """
    Single-owner handle over one database transaction.

    Attributes:
        state: One of "open", "committed", "rolled_back"
    """

    def __init__(self, session: AsyncSession):
        self._session = session
        self.state = OPEN

    @classmethod
    @asynccontextmanager
    async def begin(
        cls, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator["Transaction"]:
        """
        Open a fresh transaction from the pool.

        Whatever was not committed by the time the block exits is rolled
        back, including when the block raises.

        Example:
            async with Transaction.begin(async_session_maker) as tx:
                await groups.insert(tx, group_name="Admins")
        """
        session = session_factory()
        tx = cls(session)
        try:
            yield tx
        finally:
            await tx.close()

    @property
    def is_open(self) -> bool:
        return self.state == OPEN

    @property
    def session(self) -> AsyncSession:
        """The underlying session; only reachable while the handle is open."""
        self._ensure_open()
        return self._session

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise TransactionClosedError(
                f"Transaction already {self.state}; open a new one for this call"
            )

    async def execute(self, statement: Any, params: Optional[Any] = None) -> Any:
        self._ensure_open()
        return await self._session.execute(statement, params)

    async def scalar(self, statement: Any) -> Any:
        self._ensure_open()
        return await self._session.scalar(statement)

    async def scalars(self, statement: Any) -> Any:
        self._ensure_open()
        return await self._session.scalars(statement)

    async def commit(self) -> None:
        self._ensure_open()
        await self._session.commit()
        self.state = COMMITTED

    async def rollback(self) -> None:
        self._ensure_open()
        try:
            await self._session.rollback()
        finally:
            self.state = ROLLED_BACK

    async def close(self) -> None:
        """
        Release the connection, discarding anything uncommitted.

        Session.close() rolls the connection back without expiring the
        rows already loaded, so entities returned by reads stay usable
        after the handle is dropped.
        """
        if self.is_open:
            logger.debug("Discarding uncommitted transaction")
            self.state = ROLLED_BACK
        await self._session.close()

    @asynccontextmanager
    async def consume(self) -> AsyncIterator["Transaction"]:
        """
        Take ownership of the handle for one mutating operation.

        Commits on normal exit and rolls back if the block raises. The
        handle is closed in both cases.
        """
        self._ensure_open()
        try:
            yield self
            await self.commit()
        except BaseException:
            if self.is_open:
                await self.rollback()
            raise

    def __repr__(self) -> str:
        return f"Transaction(state={self.state!r})"
