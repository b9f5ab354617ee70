"""
Shared data-access skeleton.

Every repository method receives a Transaction. Reads borrow it and
never commit; mutations consume it through ``Transaction.consume()``,
issue exactly one ``... RETURNING`` statement and commit before
returning the affected rows. A failed mutation leaves nothing behind:
the handle is rolled back and closed.

Store failures surface as DataAccessError carrying the driver message.
"""

import logging
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, ClassVar, FrozenSet, Generic, List, Optional, Sequence, TypeVar

from sqlalchemy import asc, delete, desc, func, insert, inspect, select, update
from sqlalchemy.exc import SQLAlchemyError

from aloha.core.exceptions import DataAccessError, InvalidQueryError, NotFoundError
from aloha.core.transaction import Transaction
from aloha.schemas.envelope import ResponseEnvelope
from aloha.schemas.pagination import PageLinks, Pagination
from aloha.schemas.query import MAX_INT64, MIN_INT64, Query

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """
    Listing, insertion and error handling shared by every entity.

    Subclasses set:
        model: Mapped ORM class
        entity: Name used in log records and error messages
        filter_type: The one filter variant this entity's list accepts
        sortable_fields: Columns a client may sort by

    Attributes:
        links: Collection location used to render pagination links
    """

    model: ClassVar[type]
    entity: ClassVar[str]
    filter_type: ClassVar[type]
    sortable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def __init__(self, links: PageLinks):
        self.links = links

    # --- helpers -----------------------------------------------------------

    def _primary_key(self) -> Sequence[Any]:
        return inspect(self.model).primary_key

    def _filter_conditions(self, filter_: Any) -> List[Any]:
        """
        Translate a filter into WHERE conditions.

        Unset sub-fields add no condition, so rows whose column is NULL
        still match; set sub-fields restrict to an exact match.
        """
        conditions = []
        for field in type(filter_).model_fields:
            if field == "kind":
                continue
            value = getattr(filter_, field)
            if value is not None:
                conditions.append(getattr(self.model, field) == value)
        return conditions

    def _validate_query(self, query: Query) -> None:
        if query.filter is not None and not isinstance(query.filter, self.filter_type):
            raise InvalidQueryError(
                f"Filter '{query.filter.kind}' does not apply to {self.entity}"
            )
        if query.sort is not None and query.sort not in self.sortable_fields:
            allowed = ", ".join(sorted(self.sortable_fields)) or "none"
            raise InvalidQueryError(
                f"Cannot sort {self.entity} by '{query.sort}' (allowed: {allowed})"
            )

    def _ordering(self, query: Query) -> List[Any]:
        tie_break = [column.asc() for column in self._primary_key()]
        if query.sort is None:
            return tie_break
        direction = desc if query.order == "desc" else asc
        return [direction(getattr(self.model, query.sort)), *tie_break]

    def _store_error(self, operation: str, exc: SQLAlchemyError) -> DataAccessError:
        orig = getattr(exc, "orig", None)
        message = str(orig) if orig is not None else str(exc)
        logger.error(
            f"{self.entity} {operation} failed: {message}",
            extra={"entity": self.entity, "operation": operation},
        )
        return DataAccessError(message)

    def _not_found(self, operation: str, key: Any) -> NotFoundError:
        logger.debug(
            f"{self.entity} {operation} matched no row",
            extra={"entity": self.entity, "operation": operation},
        )
        return NotFoundError(f"{self.entity} {key} not found")

    @asynccontextmanager
    async def _reading(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            raise self._store_error(operation, exc) from exc

    @asynccontextmanager
    async def _mutating(self, tx: Transaction, operation: str) -> AsyncIterator[None]:
        """Consume ``tx`` for one mutation, committing on success."""
        try:
            async with tx.consume():
                yield
        except SQLAlchemyError as exc:
            raise self._store_error(operation, exc) from exc
        logger.debug(
            f"{self.entity} {operation} committed",
            extra={"entity": self.entity, "operation": operation},
        )

    # --- operations --------------------------------------------------------

    async def list(self, tx: Transaction, query: Query) -> ResponseEnvelope[List[ModelT]]:
        """
        Return one page of rows plus pagination metadata.

        The count and the page are read with the same predicate. Ordering
        is by primary key, or by ``query.sort`` with the primary key as
        tie-break.

        Raises:
            InvalidQueryError: Foreign filter variant or unknown sort field
            DataAccessError: Store failure
        """
        return await self._list(tx, query, self.links)

    async def _list(
        self, tx: Transaction, query: Query, links: PageLinks
    ) -> ResponseEnvelope[List[ModelT]]:
        self._validate_query(query)
        conditions = [] if query.filter is None else self._filter_conditions(query.filter)

        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        data_stmt = (
            select(self.model)
            .where(*conditions)
            .order_by(*self._ordering(query))
            .offset(query.offset())
            .limit(query.limit())
        )

        async with self._reading("list"):
            total = await tx.scalar(count_stmt)
            rows = list((await tx.scalars(data_stmt)).all())

        pagination = Pagination.create(
            query.page_number(), query.page_size(), total, links
        )
        logger.debug(
            f"Listed {len(rows)} of {total} {self.entity} rows",
            extra={"entity": self.entity, "operation": "list"},
        )
        return ResponseEnvelope(data=rows, pagination=pagination)

    async def insert(self, tx: Transaction, **values: Any) -> ModelT:
        """
        Insert one row and commit.

        Columns not supplied fall back to their defaults (generated ids,
        creation timestamps). Consumes ``tx``.
        """
        stmt = insert(self.model).values(**values).returning(self.model)
        async with self._mutating(tx, "insert"):
            row = (await tx.scalars(stmt)).one()
        return row


class CrudRepository(BaseRepository[ModelT]):
    """Operations for entities keyed by a single ``id`` column."""

    @property
    def id_column(self) -> Any:
        return self.model.id

    @staticmethod
    def _storable(entity_id: Any) -> bool:
        """Integer keys outside the signed 64-bit range can never match a row."""
        return not isinstance(entity_id, int) or MIN_INT64 <= entity_id <= MAX_INT64

    async def get_by_id(self, tx: Transaction, entity_id: Any) -> Optional[ModelT]:
        """Return the row with ``entity_id``, or None. Never commits."""
        if not self._storable(entity_id):
            return None
        stmt = select(self.model).where(self.id_column == entity_id)
        async with self._reading("get_by_id"):
            return (await tx.scalars(stmt)).one_or_none()

    async def update(self, tx: Transaction, entity_id: Any, **values: Any) -> ModelT:
        """
        Overwrite the given columns of one row and commit.

        Raises:
            NotFoundError: No row has ``entity_id``; nothing is committed
        """
        stmt = (
            update(self.model)
            .where(self.id_column == entity_id)
            .values(**values)
            .returning(self.model)
            .execution_options(populate_existing=True)
        )
        async with self._mutating(tx, "update"):
            if not self._storable(entity_id):
                raise self._not_found("update", entity_id)
            row = (await tx.scalars(stmt)).one_or_none()
            if row is None:
                raise self._not_found("update", entity_id)
        return row

    async def delete_by_id(self, tx: Transaction, entity_id: Any) -> ModelT:
        """
        Delete one row and commit, returning it.

        Raises:
            NotFoundError: No row has ``entity_id``; nothing is committed
        """
        stmt = delete(self.model).where(self.id_column == entity_id).returning(self.model)
        async with self._mutating(tx, "delete_by_id"):
            if not self._storable(entity_id):
                raise self._not_found("delete_by_id", entity_id)
            row = (await tx.scalars(stmt)).one_or_none()
            if row is None:
                raise self._not_found("delete_by_id", entity_id)
        return row

    async def delete_by_ids(self, tx: Transaction, entity_ids: Sequence[Any]) -> List[ModelT]:
        """
        Delete every row whose id is in ``entity_ids`` in one statement.

        Ids without a row are skipped, so the result may be shorter than
        the request; that is still a success and is committed.
        """
        stmt = (
            delete(self.model)
            .where(self.id_column.in_([i for i in entity_ids if self._storable(i)]))
            .returning(self.model)
        )
        async with self._mutating(tx, "delete_by_ids"):
            rows = list((await tx.scalars(stmt)).all())
        return rows


class UpsertRepository(CrudRepository[ModelT]):
    """CRUD plus the update-or-insert write path."""

    async def upsert(self, tx: Transaction, entity_id: Optional[uuid.UUID], **values: Any) -> ModelT:
        """
        Update the row with ``entity_id`` if it exists, else insert one.

        A supplied id is kept for the new row; without one the id is
        generated. Either way ``tx`` is consumed.
        """
        existing = None
        if entity_id is not None:
            existing = await self.get_by_id(tx, entity_id)
        if existing is not None:
            return await self.update(tx, entity_id, **values)
        if entity_id is not None:
            values["id"] = entity_id
        return await self.insert(tx, **values)
