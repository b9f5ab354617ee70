"""Permission model."""

import uuid

from sqlalchemy import Column, DateTime, String, Text, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class Permission(Base, ModelMixin):
    """
    Named permission that can be granted to groups or individual users.

    Attributes:
        id: UUID primary key
        name: Unique permission name (e.g. "users:write")
        description: Optional free-form description
        created_at: Creation timestamp (UTC)
    """

    __tablename__ = "permissions"
    _repr_fields = ("id", "name")

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False, unique=True)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
