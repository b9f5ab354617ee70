"""
Tests for the transaction ownership handle.

Tests follow AAA (Arrange, Act, Assert) pattern.
"""

import pytest
from sqlalchemy import func, insert, select

from aloha.core.exceptions import TransactionClosedError
from aloha.core.transaction import COMMITTED, OPEN, ROLLED_BACK, Transaction
from aloha.models import UserGroup
from aloha.schemas.query import Query, UserGroupFilter


async def _group_count(session_factory) -> int:
    async with Transaction.begin(session_factory) as tx:
        return await tx.scalar(select(func.count()).select_from(UserGroup))


class TestTransactionBegin:
    @pytest.mark.anyio
    async def test_uncommitted_work_rolled_back_on_exit(self, session_factory):
        """
        Test a handle that is never committed leaves no trace.

        Arrange: Open a transaction
        Act: Insert a row, leave the block without committing
        Assert: Handle rolled back, row not visible afterwards
        """
        # Arrange & Act
        async with Transaction.begin(session_factory) as tx:
            await tx.execute(insert(UserGroup).values(group_name="Ghosts"))
            assert tx.state == OPEN

        # Assert
        assert tx.state == ROLLED_BACK
        assert await _group_count(session_factory) == 0

    @pytest.mark.anyio
    async def test_rolled_back_when_block_raises(self, session_factory):
        with pytest.raises(RuntimeError):
            async with Transaction.begin(session_factory) as tx:
                await tx.execute(insert(UserGroup).values(group_name="Ghosts"))
                raise RuntimeError("boom")

        assert tx.state == ROLLED_BACK
        assert await _group_count(session_factory) == 0

    @pytest.mark.anyio
    async def test_reads_compose_without_commit(self, session_factory):
        async with Transaction.begin(session_factory) as tx:
            first = await tx.scalar(select(func.count()).select_from(UserGroup))
            second = await tx.scalar(select(func.count()).select_from(UserGroup))

            assert first == second == 0
            assert tx.is_open

    @pytest.mark.anyio
    async def test_read_entities_usable_after_exit(self, session_factory, group_repo):
        """
        Test entities returned by a read outlive the dropped handle.

        Arrange: Commit a group from one transaction
        Act: Read it back in a second transaction that is never committed
        Assert: Attributes are still readable once the block has exited
        """
        # Arrange
        async with Transaction.begin(session_factory) as tx:
            created = await group_repo.insert(tx, group_name="Admins")

        # Act
        async with Transaction.begin(session_factory) as tx:
            group = await group_repo.get_by_name(tx, "Admins")
            page = await group_repo.list(tx, Query[UserGroupFilter]())

        # Assert
        assert tx.state == ROLLED_BACK
        assert group.group_name == "Admins"
        assert group.id == created.id
        assert [g.group_name for g in page.data] == ["Admins"]


class TestTransactionConsume:
    @pytest.mark.anyio
    async def test_consume_commits_and_closes(self, session_factory):
        """
        Test consume() commits exactly once on success.

        Arrange: Open a transaction
        Act: Insert inside consume()
        Assert: State committed, row visible from a fresh transaction
        """
        # Arrange
        async with Transaction.begin(session_factory) as tx:
            # Act
            async with tx.consume():
                await tx.execute(insert(UserGroup).values(group_name="Admins"))

            # Assert
            assert tx.state == COMMITTED
            assert not tx.is_open

        assert await _group_count(session_factory) == 1

    @pytest.mark.anyio
    async def test_consume_rolls_back_on_error(self, session_factory):
        async with Transaction.begin(session_factory) as tx:
            with pytest.raises(ValueError):
                async with tx.consume():
                    await tx.execute(insert(UserGroup).values(group_name="Admins"))
                    raise ValueError("statement failed")

            assert tx.state == ROLLED_BACK

        assert await _group_count(session_factory) == 0

    @pytest.mark.anyio
    async def test_handle_unusable_after_consume(self, session_factory):
        async with Transaction.begin(session_factory) as tx:
            async with tx.consume():
                await tx.execute(insert(UserGroup).values(group_name="Admins"))

            with pytest.raises(TransactionClosedError):
                await tx.scalar(select(func.count()).select_from(UserGroup))
            with pytest.raises(TransactionClosedError):
                async with tx.consume():
                    pass
            with pytest.raises(TransactionClosedError):
                _ = tx.session

    @pytest.mark.anyio
    async def test_handle_unusable_after_failed_consume(self, session_factory):
        async with Transaction.begin(session_factory) as tx:
            with pytest.raises(ValueError):
                async with tx.consume():
                    raise ValueError("boom")

            with pytest.raises(TransactionClosedError):
                await tx.commit()

    def test_repr_shows_state(self):
        tx = Transaction(session=None)

        assert repr(tx) == "Transaction(state='open')"
