"""Wire projections and request bodies for permission grants."""

import uuid

from pydantic import BaseModel

from aloha.schemas.common import EntityResponse


class GroupPermissionResponse(EntityResponse):
    group_id: uuid.UUID
    permission_id: uuid.UUID
    created_at: str


class GroupPermissionRequest(BaseModel):
    group_id: uuid.UUID
    permission_id: uuid.UUID


class UserPermissionResponse(EntityResponse):
    user_id: uuid.UUID
    permission_id: uuid.UUID
    created_at: str


class UserPermissionRequest(BaseModel):
    user_id: uuid.UUID
    permission_id: uuid.UUID
