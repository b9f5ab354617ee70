"""
Content repository.

Content rows use a server-generated integer id and carry an
``updated_at`` stamp refreshed on every update.
"""

from typing import Any

from aloha.core.transaction import Transaction
from aloha.models.base import utc_now
from aloha.models.content import Content
from aloha.repositories.base import CrudRepository
from aloha.schemas.query import ContentFilter


class ContentRepository(CrudRepository[Content]):
    model = Content
    entity = "content"
    filter_type = ContentFilter
    sortable_fields = frozenset({"created_at", "updated_at"})

    async def update(self, tx: Transaction, entity_id: Any, **values: Any) -> Content:
        values.setdefault("updated_at", utc_now())
        return await super().update(tx, entity_id, **values)
