"""
Content model.

Short text posts authored by users. Unlike the administrative entities
the primary key is a server-generated integer.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Text, Uuid

from aloha.models.base import Base, ModelMixin, utc_now


class Content(Base, ModelMixin):
    """
    Authored content item.

    Attributes:
        id: Auto-incrementing integer primary key
        body: Text of the post
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
        author_id: Authoring user, NULL if unattributed
    """

    __tablename__ = "contents"
    _repr_fields = ("id", "author_id")

    id = Column(Integer, primary_key=True, autoincrement=True)
    body = Column(Text, nullable=False, default="")
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )
    author_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
