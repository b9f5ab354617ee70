"""Wire projections and request bodies for users."""

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from aloha.schemas.common import EntityResponse


class UserResponse(EntityResponse):
    """User as returned to clients; the password hash is never included."""

    id: uuid.UUID
    username: str
    created_at: str
    user_group_id: Optional[uuid.UUID] = None


class UserCreateRequest(BaseModel):
    username: str = Field(min_length=1, max_length=255)
    password: str = Field(min_length=1)
    user_group_id: Optional[uuid.UUID] = None

    class Config:
        json_schema_extra = {
            "example": {
                "username": "alice",
                "password": "correct horse battery staple",
                "user_group_id": None,
            }
        }


class UserSaveRequest(BaseModel):
    """
    Body of PUT /users/{id}.

    Attributes:
        username: Login name
        password: New password; omit to keep the current one (required
            when the id does not exist yet)
        user_group_id: Owning group, null for none
    """

    username: str = Field(min_length=1, max_length=255)
    password: Optional[str] = Field(default=None, min_length=1)
    user_group_id: Optional[uuid.UUID] = None
