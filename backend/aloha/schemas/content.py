import uuid
from typing import Optional

from pydantic import BaseModel, Field

from aloha.schemas.common import EntityResponse


class ContentResponse(EntityResponse):
    id: int
    body: str
    created_at: str
    updated_at: str
    author_id: Optional[uuid.UUID] = None


class ContentCreateRequest(BaseModel):
    body: str = Field(default="", description="Text of the post")
    author_id: Optional[uuid.UUID] = None


class ContentUpdateRequest(BaseModel):
    body: str = Field(description="Replacement text")
