"""User group model."""

import uuid

from sqlalchemy import Column, DateTime, String, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class UserGroup(Base, ModelMixin):
    """
    Named group that users belong to.

    Attributes:
        id: UUID primary key
        group_name: Unique group name
        created_at: Creation timestamp (UTC)
    """

    __tablename__ = "user_groups"
    _repr_fields = ("id", "group_name")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    group_name = Column(String(255), nullable=False, unique=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
