"""
Note Model.

The single durable table: notes(id, title, content, created_at, updated_at).
"""

from sqlalchemy import Text
from sqlalchemy.orm import Mapped, mapped_column

from notedesk.models.base import Base, EpochTimestampMixin, UUIDMixin

DEFAULT_TITLE = "Untitled"


class Note(UUIDMixin, EpochTimestampMixin, Base):
    """
    Note database model.

    Timestamps are integer milliseconds since the epoch. created_at is
    written once; updated_at moves forward on every content change.
    """

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=DEFAULT_TITLE,
    )
    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r})>"
