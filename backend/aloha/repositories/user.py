"""
User repository.

Credentials are hashed here, on the write path, so plaintext passwords
never reach a statement.
"""

import uuid
from typing import Optional

from sqlalchemy import select

from aloha.core.exceptions import InvalidRequestError
from aloha.core.security import get_password_hash
from aloha.core.transaction import Transaction
from aloha.models.user import User
from aloha.repositories.base import UpsertRepository
from aloha.schemas.query import UserFilter


class UserRepository(UpsertRepository[User]):
    """
    Repository for user accounts.

    Lists accept UserFilter; an unset user_group_id also returns users
    that belong to no group.
    """

    model = User
    entity = "user"
    filter_type = UserFilter
    sortable_fields = frozenset({"username", "created_at"})

    async def get_by_username(self, tx: Transaction, username: str) -> Optional[User]:
        """
        Retrieve a user by login name.

        Example:
            >>> user = await repo.get_by_username(tx, "admin")
            >>> print(user.id if user else "Not found")
        """
        stmt = select(User).where(User.username == username)
        async with self._reading("get_by_username"):
            return (await tx.scalars(stmt)).one_or_none()

    async def username_exists(self, tx: Transaction, username: str) -> bool:
        stmt = select(User.id).where(User.username == username).limit(1)
        async with self._reading("username_exists"):
            return (await tx.scalar(stmt)) is not None

    async def create(
        self,
        tx: Transaction,
        username: str,
        password: str,
        user_group_id: Optional[uuid.UUID] = None,
    ) -> User:
        """Insert a new user with a freshly generated id. Consumes ``tx``."""
        return await self.insert(
            tx,
            username=username,
            password_hash=get_password_hash(password),
            user_group_id=user_group_id,
        )

    async def save(
        self,
        tx: Transaction,
        user_id: Optional[uuid.UUID],
        username: str,
        password: Optional[str] = None,
        user_group_id: Optional[uuid.UUID] = None,
    ) -> User:
        """
        Update the user with ``user_id`` or create it when absent.

        On update the stored hash is kept unless a new password is
        supplied. Creating a user requires a password.

        Raises:
            InvalidRequestError: Creating a user without a password
        """
        values = {"username": username, "user_group_id": user_group_id}
        if password:
            values["password_hash"] = get_password_hash(password)

        existing = None
        if user_id is not None:
            existing = await self.get_by_id(tx, user_id)
        if existing is not None:
            return await self.update(tx, user_id, **values)

        if "password_hash" not in values:
            raise InvalidRequestError("A password is required to create a user")
        if user_id is not None:
            values["id"] = user_id
        return await self.insert(tx, **values)
