"""
Base Repository.

Base class for repositories keyed by a string id.

Reads go through the ORM so callers get model instances back; writes are
issued as single Core statements so the caller can see how many rows
they touched.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from notedesk.core.logging import get_logger
from notedesk.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[Note]):
            model = Note

    Absence is never an error here: lookups return None, deletes
    return a row count of zero.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model)
            .where(self.model.id == id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[ModelType]:
        """Get every record in natural storage order."""
        result = await self.session.execute(
            select(self.model).execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create(self, values: dict[str, Any]) -> None:
        """
        Insert one row.

        Raises:
            IntegrityError: If the primary key already exists
        """
        await self.session.execute(insert(self.model.__table__).values(**values))

    async def delete_by_id(self, id: str) -> int:
        """Delete a record by ID. Returns the number of rows removed."""
        table = self.model.__table__
        result = await self.session.execute(delete(table).where(table.c.id == id))
        return result.rowcount

    async def exists(self, id: str) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Get the total number of records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()
