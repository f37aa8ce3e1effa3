"""
SQLAlchemy Base Model.

Base class for all database models with common fields.
"""

from uuid import uuid4

from sqlalchemy import BigInteger, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from notedesk.core.utils import now_ms


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class EpochTimestampMixin:
    """Mixin that adds created_at and updated_at as epoch milliseconds."""

    created_at: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        nullable=False,
    )
    updated_at: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        nullable=False,
    )


class UUIDMixin:
    """Mixin that adds a text primary key defaulting to a random UUID."""

    id: Mapped[str] = mapped_column(
        String,
        primary_key=True,
        default=lambda: str(uuid4()),
    )
