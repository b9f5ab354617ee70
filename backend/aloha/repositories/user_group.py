"""User group repository."""

import uuid
from typing import Optional

from sqlalchemy import select

from aloha.core.transaction import Transaction
from aloha.models.user_group import UserGroup
from aloha.repositories.base import UpsertRepository
from aloha.schemas.query import UserGroupFilter


class UserGroupRepository(UpsertRepository[UserGroup]):
    model = UserGroup
    entity = "user_group"
    filter_type = UserGroupFilter
    sortable_fields = frozenset({"group_name", "created_at"})

    async def get_by_name(self, tx: Transaction, group_name: str) -> Optional[UserGroup]:
        stmt = select(UserGroup).where(UserGroup.group_name == group_name)
        async with self._reading("get_by_name"):
            return (await tx.scalars(stmt)).one_or_none()

    async def save(
        self, tx: Transaction, group_id: Optional[uuid.UUID], group_name: str
    ) -> UserGroup:
        """Rename the group with ``group_id``, or create it when absent."""
        return await self.upsert(tx, group_id, group_name=group_name)
