import uuid
from typing import Optional

from pydantic import BaseModel, Field

from aloha.schemas.common import EntityResponse


class PermissionResponse(EntityResponse):
    id: uuid.UUID
    name: str
    description: Optional[str] = None
    created_at: str


class PermissionRequest(BaseModel):
    name: str = Field(min_length=1, max_length=255, description="Unique permission name")
    description: Optional[str] = Field(default=None, description="Human-readable description")
