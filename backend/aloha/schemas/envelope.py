"""
Response envelope: ``{"data": ..., "pagination": {...} | null}``.

List operations always fill ``pagination``; single-entity and bulk
delete results leave it null.
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict

from aloha.schemas.pagination import Pagination

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """Payload (entity, list or count) plus optional pagination."""

    # data may hold ORM entities until mapped to wire projections
    model_config = ConfigDict(arbitrary_types_allowed=True)

    data: T
    pagination: Optional[Pagination] = None

    def map_items(self, fn: Callable[[Any], Any]) -> "ResponseEnvelope[List[Any]]":
        """Project every item of a list payload, keeping pagination."""
        return ResponseEnvelope(
            data=[fn(item) for item in self.data],
            pagination=self.pagination,
        )
