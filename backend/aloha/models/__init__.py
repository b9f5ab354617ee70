"""
SQLAlchemy ORM models.

Import models from this module to ensure they're registered with the
declarative base before create_all().
"""

from aloha.models.base import Base, ModelMixin, format_timestamp, utc_now
from aloha.models.user_group import UserGroup
from aloha.models.user import User
from aloha.models.permission import Permission
from aloha.models.group_permission import GroupPermission
from aloha.models.user_permission import UserPermission
from aloha.models.content import Content

__all__ = [
    "Base",
    "ModelMixin",
    "format_timestamp",
    "utc_now",
    "UserGroup",
    "User",
    "Permission",
    "GroupPermission",
    "UserPermission",
    "Content",
]
