"""
Note Repository.

Durable CRUD over the notes table. Knows nothing about legacy ids or
datetime conversion; every value arriving here is already canonical.
"""

from typing import Any

from sqlalchemy import func, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from notedesk.models.note import Note
from notedesk.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for the Note model.

    Inherits lookups and counts from BaseRepository and adds the
    note-specific writes.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def insert(self, note: dict[str, Any]) -> None:
        """
        Insert a new note.

        Args:
            note: Mapping with id, title, content, created_at, updated_at

        Raises:
            IntegrityError: If a note with the same id already exists
        """
        await self.create(note)

    async def update_content(self, id: str, content: str, updated_at: int) -> int:
        """
        Replace a note's content and bump updated_at.

        Returns:
            Number of rows affected (0 when the id is unknown)
        """
        table = Note.__table__
        result = await self.session.execute(
            update(table)
            .where(table.c.id == id)
            .values(content=content, updated_at=updated_at)
        )
        return result.rowcount

    async def delete(self, id: str) -> int:
        """
        Delete a note.

        Returns:
            Number of rows removed (0 when the id is unknown)
        """
        return await self.delete_by_id(id)

    async def fetch_all(self) -> list[Note]:
        """Get every note. No ordering is applied."""
        return await self.get_all()

    async def fetch_by_id(self, id: str) -> Note | None:
        """Get a note by id, or None."""
        return await self.get_by_id_or_none(id)

    async def upsert(self, note: dict[str, Any], title: str | None = None) -> None:
        """
        Insert the note, or update it in place if the id already exists.

        Runs as one INSERT ... ON CONFLICT statement, so there is no
        window between the existence check and the write.

        On insert, updated_at is raised to created_at if it is lower.

        On conflict:
            content     - replaced
            updated_at  - replaced, but never below the stored created_at
            title       - replaced only when ``title`` is given
            created_at  - left alone

        Args:
            note: Full canonical row used when inserting
            title: Title to write on the update path, or None to keep
                the stored one
        """
        table = Note.__table__
        updated_at = note["updated_at"]
        row = {**note, "updated_at": max(note["created_at"], updated_at)}
        stmt = sqlite_insert(table).values(**row)

        set_: dict[str, Any] = {
            "content": stmt.excluded.content,
            "updated_at": func.max(table.c.created_at, updated_at),
        }
        if title is not None:
            set_["title"] = title

        await self.session.execute(
            stmt.on_conflict_do_update(index_elements=[table.c.id], set_=set_)
        )
