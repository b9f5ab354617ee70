"""
Pagination metadata and navigation links.

A Pagination is built once per list operation, right after the total
row count is known, and is immutable afterwards. Links always point at
the adjacent page:

- prev_page is present iff page > 1
- next_page is present iff page * size < total
"""

from typing import Optional
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field


class PageLinks(BaseModel):
    """
    Where a collection lives, used to render navigation links.

    Attributes:
        collection_url: Absolute URL of the collection
            (e.g. "http://127.0.0.1:8000/api/users")
    """

    model_config = ConfigDict(frozen=True)

    collection_url: str

    def url_for(self, page: int, size: int) -> str:
        return f"{self.collection_url}?{urlencode({'page': page, 'size': size})}"


class Pagination(BaseModel):
    """Wire block describing one page of a listing."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    size: int = Field(ge=1)
    total: int = Field(ge=0)
    prev_page: Optional[str] = None
    next_page: Optional[str] = None

    @classmethod
    def create(cls, page: int, size: int, total: int, links: PageLinks) -> "Pagination":
        """
        Build pagination for ``page`` of a collection holding ``total`` rows.

        A page past the end still gets a prev_page link (when page > 1)
        and never a next_page link.
        """
        prev_page = links.url_for(page - 1, size) if page > 1 else None
        next_page = links.url_for(page + 1, size) if page * size < total else None
        return cls(
            page=page,
            size=size,
            total=total,
            prev_page=prev_page,
            next_page=next_page,
        )
