"""
Repositories for permission grants.

A grant links an owner (a user group or a user) to a permission and is
keyed by the pair. Listings can be scoped to one owner or to one
permission; their pagination links then point at the scoped
collection.
"""

import uuid
from typing import ClassVar, List, Optional

from sqlalchemy import and_, delete, select

from aloha.core.transaction import Transaction
from aloha.models.group_permission import GroupPermission
from aloha.models.user_permission import UserPermission
from aloha.repositories.base import BaseRepository, ModelT
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.pagination import PageLinks
from aloha.schemas.query import GroupPermissionFilter, Query, UserPermissionFilter


class AssociationRepository(BaseRepository[ModelT]):
    """
    Grant operations keyed by (owner, permission).

    Subclasses set ``owner_field`` (the owner column name) and
    ``owner_segment`` (the path segment of owner-scoped listings).
    """

    owner_field: ClassVar[str]
    owner_segment: ClassVar[str]

    @property
    def owner_column(self):
        return getattr(self.model, self.owner_field)

    def _key_clause(self, owner_id: uuid.UUID, permission_id: uuid.UUID):
        return and_(self.owner_column == owner_id, self.model.permission_id == permission_id)

    def _scoped(self, query: Query, **fields) -> Query:
        """Pin ``fields`` on the query's filter, keeping its other conditions."""
        if query.filter is None:
            scoped = self.filter_type(**fields)
        elif isinstance(query.filter, self.filter_type):
            scoped = query.filter.model_copy(update=fields)
        else:
            # Foreign variant; left in place so the listing rejects it.
            return query
        return query.model_copy(update={"filter": scoped})

    async def list_by_owner(
        self, tx: Transaction, owner_id: uuid.UUID, query: Query
    ) -> ResponseEnvelope[List[ModelT]]:
        links = PageLinks(
            collection_url=f"{self.links.collection_url}/{self.owner_segment}/{owner_id}"
        )
        return await self._list(tx, self._scoped(query, **{self.owner_field: owner_id}), links)

    async def list_by_permission_id(
        self, tx: Transaction, permission_id: uuid.UUID, query: Query
    ) -> ResponseEnvelope[List[ModelT]]:
        links = PageLinks(
            collection_url=f"{self.links.collection_url}/permission/{permission_id}"
        )
        return await self._list(tx, self._scoped(query, permission_id=permission_id), links)

    async def get(
        self, tx: Transaction, owner_id: uuid.UUID, permission_id: uuid.UUID
    ) -> Optional[ModelT]:
        stmt = select(self.model).where(self._key_clause(owner_id, permission_id))
        async with self._reading("get"):
            return (await tx.scalars(stmt)).one_or_none()

    async def delete(
        self, tx: Transaction, owner_id: uuid.UUID, permission_id: uuid.UUID
    ) -> ModelT:
        """
        Revoke one grant and commit.

        Raises:
            NotFoundError: The grant does not exist; nothing is committed
        """
        stmt = (
            delete(self.model)
            .where(self._key_clause(owner_id, permission_id))
            .returning(self.model)
        )
        async with self._mutating(tx, "delete"):
            row = (await tx.scalars(stmt)).one_or_none()
            if row is None:
                raise self._not_found("delete", f"({owner_id}, {permission_id})")
        return row

    async def delete_by_owner(self, tx: Transaction, owner_id: uuid.UUID) -> List[ModelT]:
        """Revoke every grant of one owner; none at all is still a success."""
        stmt = delete(self.model).where(self.owner_column == owner_id).returning(self.model)
        async with self._mutating(tx, "delete_by_owner"):
            rows = list((await tx.scalars(stmt)).all())
        return rows

    async def delete_by_permission_id(
        self, tx: Transaction, permission_id: uuid.UUID
    ) -> List[ModelT]:
        stmt = (
            delete(self.model)
            .where(self.model.permission_id == permission_id)
            .returning(self.model)
        )
        async with self._mutating(tx, "delete_by_permission_id"):
            rows = list((await tx.scalars(stmt)).all())
        return rows


class GroupPermissionRepository(AssociationRepository[GroupPermission]):
    model = GroupPermission
    entity = "group_permission"
    filter_type = GroupPermissionFilter
    sortable_fields = frozenset({"group_id", "permission_id", "created_at"})
    owner_field = "group_id"
    owner_segment = "group"

    async def list_by_group_id(self, tx: Transaction, group_id: uuid.UUID, query: Query):
        return await self.list_by_owner(tx, group_id, query)

    async def delete_by_group_id(self, tx: Transaction, group_id: uuid.UUID):
        return await self.delete_by_owner(tx, group_id)


class UserPermissionRepository(AssociationRepository[UserPermission]):
    model = UserPermission
    entity = "user_permission"
    filter_type = UserPermissionFilter
    sortable_fields = frozenset({"user_id", "permission_id", "created_at"})
    owner_field = "user_id"
    owner_segment = "user"

    async def list_by_user_id(self, tx: Transaction, user_id: uuid.UUID, query: Query):
        return await self.list_by_owner(tx, user_id, query)

    async def delete_by_user_id(self, tx: Transaction, user_id: uuid.UUID):
        return await self.delete_by_owner(tx, user_id)
