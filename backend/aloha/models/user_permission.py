"""User-to-permission grant (composite key)."""

from sqlalchemy import Column, DateTime, ForeignKey, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class UserPermission(Base, ModelMixin):
    """
    Grants a permission directly to a single user.

    Attributes:
        user_id: Granted user (part of the primary key)
        permission_id: Granted permission (part of the primary key)
        created_at: Grant timestamp (UTC)
    """

    __tablename__ = "user_permissions"
    _repr_fields = ("user_id", "permission_id")

    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id = Column(
        Uuid,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
