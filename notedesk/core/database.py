"""
Database Handle.

One SQLite store per process. The handle is constructed at startup,
opened once (creating the data directory and the schema when missing)
and handed to whoever needs sessions. Nothing here is module-global.

Usage:
    async with open_database(get_database_url()) as database:
        async with database.session() as session:
            repo = NoteRepository(session)
            ...
"""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from notedesk.core.logging import get_logger
from notedesk.models.base import Base

logger = get_logger(__name__)


def _is_memory(database: str | None) -> bool:
    return not database or database == ":memory:"


class Database:
    """
    Owned async SQLAlchemy engine plus its session factory.

    An in-memory URL gets a StaticPool so every session sees the same
    connection (and therefore the same tables).
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        self.url = url
        self.echo = echo
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    async def open(self) -> None:
        """
        Create the engine, the data directory and the schema.

        Calling open() on an already open handle is a no-op.
        """
        if self._engine is not None:
            return

        url = make_url(self.url)
        kwargs: dict[str, Any] = {"echo": self.echo}

        if url.get_backend_name() == "sqlite":
            if _is_memory(url.database):
                kwargs["poolclass"] = StaticPool
                kwargs["connect_args"] = {"check_same_thread": False}
            else:
                Path(url.database).parent.mkdir(parents=True, exist_ok=True)

        self._engine = create_async_engine(self.url, **kwargs)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

        logger.info("Database opened", extra={"url": url.render_as_string(hide_password=True)})

    async def close(self) -> None:
        """Dispose of the engine. Safe to call more than once."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.debug("Database closed")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        Provide a session bound to one transaction.

        Commits when the block exits normally, rolls back and re-raises
        otherwise.
        """
        if self._session_factory is None:
            raise RuntimeError("Database is not open")

        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


@asynccontextmanager
async def open_database(url: str, echo: bool = False) -> AsyncGenerator[Database, None]:
    """Open a Database for the lifetime of the block."""
    database = Database(url, echo=echo)
    await database.open()
    try:
        yield database
    finally:
        await database.close()
