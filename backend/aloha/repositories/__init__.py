"""Data-access layer: one repository per entity."""

from aloha.repositories.association import (
    GroupPermissionRepository,
    UserPermissionRepository,
)
from aloha.repositories.content import ContentRepository
from aloha.repositories.permission import PermissionRepository
from aloha.repositories.user import UserRepository
from aloha.repositories.user_group import UserGroupRepository

__all__ = [
    "ContentRepository",
    "GroupPermissionRepository",
    "PermissionRepository",
    "UserGroupRepository",
    "UserPermissionRepository",
    "UserRepository",
]
