"""
User account model.

Stores credentials for session login and an optional group
membership. The password hash never leaves the data-access layer: the
wire projection (UserResponse) omits it.
"""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class User(Base, ModelMixin):
    """
    User account.

    Attributes:
        id: UUID primary key
        username: Unique login name
        password_hash: Bcrypt hash of the password (never serialized)
        created_at: Creation timestamp (UTC)
        user_group_id: Owning group, NULL when the user has none
    """

    __tablename__ = "users"
    _repr_fields = ("id", "username")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    user_group_id = Column(
        Uuid,
        ForeignKey("user_groups.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
