"""Group-to-permission grant (composite key)."""

from sqlalchemy import Column, DateTime, ForeignKey, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class GroupPermission(Base, ModelMixin):
    """
    Grants a permission to every member of a user group.

    Attributes:
        group_id: Granted group (part of the primary key)
        permission_id: Granted permission (part of the primary key)
        created_at: Grant timestamp (UTC)
    """

    __tablename__ = "group_permissions"
    _repr_fields = ("group_id", "permission_id")

    group_id = Column(
        Uuid,
        ForeignKey("user_groups.id", ondelete="CASCADE"),
        primary_key=True,
    )
    permission_id = Column(
        Uuid,
        ForeignKey("permissions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
