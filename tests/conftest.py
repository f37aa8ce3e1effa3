"""
Root Pytest Fixtures.

Shared fixtures available to all test types.

Test Database Configuration:
    Every test gets its own in-memory SQLite store (aiosqlite driver,
    StaticPool), opened through the same Database class the application
    uses. Nothing touches the on-disk data directory.
"""

from collections.abc import AsyncGenerator

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from notedesk.core.database import Database

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
async def database() -> AsyncGenerator[Database, None]:
    """
    Provide an open, empty note store.

    Scope is function so that no test can see another test's notes.
    """
    db = Database(TEST_DATABASE_URL)
    await db.open()
    yield db
    await db.close()


@pytest.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """
    Provide a database session for a single test.

    Changes are rolled back after the test, including after a test that
    provoked a constraint violation.

    Usage:
        async def test_insert(db_session: AsyncSession):
            repo = NoteRepository(db_session)
            await repo.insert({...})
    """
    async with AsyncSession(database.engine, expire_on_commit=False) as session:
        yield session
        await session.rollback()


# =============================================================================
# Utility Fixtures
# =============================================================================


@pytest.fixture
def anyio_backend() -> str:
    """Specify the async backend for anyio."""
    return "asyncio"
