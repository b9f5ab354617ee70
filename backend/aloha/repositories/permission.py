"""
Permission repository.

Permissions are granted to groups and users through the association
repositories; deleting one cascades to its grants in the store.
"""

import uuid
from typing import Optional

from sqlalchemy import select

from aloha.core.transaction import Transaction
from aloha.models.permission import Permission
from aloha.repositories.base import UpsertRepository
from aloha.schemas.query import PermissionFilter


class PermissionRepository(UpsertRepository[Permission]):
    model = Permission
    entity = "permission"
    filter_type = PermissionFilter
    sortable_fields = frozenset({"name", "created_at"})

    async def get_by_name(self, tx: Transaction, name: str) -> Optional[Permission]:
        stmt = select(Permission).where(Permission.name == name)
        async with self._reading("get_by_name"):
            return (await tx.scalars(stmt)).one_or_none()

    async def name_exists(self, tx: Transaction, name: str) -> bool:
        stmt = select(Permission.id).where(Permission.name == name).limit(1)
        async with self._reading("name_exists"):
            return (await tx.scalar(stmt)) is not None

    async def save(
        self,
        tx: Transaction,
        permission_id: Optional[uuid.UUID],
        name: str,
        description: Optional[str] = None,
    ) -> Permission:
        """Update the permission with ``permission_id``, or create it when absent."""
        return await self.upsert(
            tx, permission_id, name=name, description=description
        )
