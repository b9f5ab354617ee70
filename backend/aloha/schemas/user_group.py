import uuid

from pydantic import BaseModel, Field

from aloha.schemas.common import EntityResponse


class UserGroupResponse(EntityResponse):
    id: uuid.UUID
    group_name: str
    created_at: str


class UserGroupRequest(BaseModel):
    group_name: str = Field(min_length=1, max_length=255)
