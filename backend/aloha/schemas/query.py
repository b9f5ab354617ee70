"""
Listing query: page, size, sort, order and an entity-specific filter.

Each entity has exactly one filter variant carrying only the fields its
list predicate understands. The ``kind`` tag makes the set closed: a
repository rejects a query whose filter belongs to another entity.
"""

import uuid
from typing import Any, Generic, Literal, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aloha.core.exceptions import InvalidQueryError

DEFAULT_PAGE = 1
DEFAULT_SIZE = 10
MAX_SIZE = 1000

# Store integers are signed 64-bit.
MAX_INT64 = 2**63 - 1
MIN_INT64 = -(2**63)

# Largest page whose offset still fits MAX_INT64 at MAX_SIZE rows per page.
MAX_PAGE = MAX_INT64 // MAX_SIZE


class UserFilter(BaseModel):
    """Restrict users to one group; unset means every user, grouped or not."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["user"] = "user"
    user_group_id: Optional[uuid.UUID] = None


class UserGroupFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user_group"] = "user_group"
    group_name: Optional[str] = None


class PermissionFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["permission"] = "permission"
    name: Optional[str] = None


class GroupPermissionFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["group_permission"] = "group_permission"
    group_id: Optional[uuid.UUID] = None
    permission_id: Optional[uuid.UUID] = None


class UserPermissionFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["user_permission"] = "user_permission"
    user_id: Optional[uuid.UUID] = None
    permission_id: Optional[uuid.UUID] = None


class ContentFilter(BaseModel):
    """Restrict content to one author; unset also matches unattributed rows."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["content"] = "content"
    author_id: Optional[uuid.UUID] = None


EntityFilter = Union[
    UserFilter,
    UserGroupFilter,
    PermissionFilter,
    GroupPermissionFilter,
    UserPermissionFilter,
    ContentFilter,
]

F = TypeVar("F", bound=EntityFilter)


class Query(BaseModel, Generic[F]):
    """
    Client-supplied listing request.

    page and size default to 1 and 10 when unset; values below 1 or
    above MAX_PAGE / MAX_SIZE are rejected rather than clamped.

    Example:
        >>> q = Query[UserFilter](page=3, size=20)
        >>> q.offset()
        40
    """

    model_config = ConfigDict(frozen=True)

    page: Optional[int] = Field(default=None, ge=1, le=MAX_PAGE)
    size: Optional[int] = Field(default=None, ge=1, le=MAX_SIZE)
    sort: Optional[str] = None
    order: Optional[str] = None
    filter: Optional[F] = None

    @field_validator("order")
    @classmethod
    def validate_order(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        value = v.strip().lower()
        if value not in {"asc", "desc"}:
            raise ValueError("order must be 'asc' or 'desc'")
        return value

    @classmethod
    def parse(cls, **params: Any) -> "Query":
        """
        Build a query from raw parameters, reporting bad input as
        InvalidQueryError instead of a pydantic ValidationError.
        """
        try:
            return cls(**params)
        except ValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in exc.errors()
            )
            raise InvalidQueryError(f"Invalid query: {problems}") from exc

    def page_number(self) -> int:
        return self.page if self.page is not None else DEFAULT_PAGE

    def page_size(self) -> int:
        return self.size if self.size is not None else DEFAULT_SIZE

    def offset(self) -> int:
        """Zero-based number of rows to skip."""
        return (self.page_number() - 1) * self.page_size()

    def limit(self) -> int:
        return self.page_size()
