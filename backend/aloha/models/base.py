"""
Base model and shared column helpers for SQLAlchemy ORM.

Timestamps are timezone-aware UTC values generated application-side so
SQLite and PostgreSQL behave the same; the wire projections render them
as formatted strings.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import declarative_base


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    """Current UTC time (timezone-aware)."""
    return datetime.now(timezone.utc)


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """
    Render a stored timestamp for the wire.

    Returns:
        "YYYY-MM-DD HH:MM:SS" in UTC, or None when the value is missing

    Note:
        SQLite hands back naive datetimes; they are already UTC.
    """
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(TIMESTAMP_FORMAT)


class ModelMixin:
    """Readable repr built from a model's identifying columns."""

    _repr_fields: tuple = ("id",)

    def __repr__(self) -> str:
        attrs = ", ".join(
            f"{key}={getattr(self, key)!r}" for key in self._repr_fields
        )
        return f"{self.__class__.__name__}({attrs})"
