"""Shared pieces of the entity wire projections."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from aloha.models.base import format_timestamp


class EntityResponse(BaseModel):
    """
    Base for wire projections built from ORM entities.

    Temporal fields are rendered as "YYYY-MM-DD HH:MM:SS" strings.
    """

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at", mode="before", check_fields=False)
    @classmethod
    def render_timestamp(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return format_timestamp(v)
        return v

    @classmethod
    def from_entity(cls, entity: Any):
        return cls.model_validate(entity)
