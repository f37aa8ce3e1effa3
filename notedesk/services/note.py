"""
Note Service.

The domain contract the presentation client talks to. Assigns ids and
timestamps, fills defaults, and funnels every incoming shape through
the compatibility layer before it reaches the repository.
"""

from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from notedesk.core.exceptions import NotFoundError
from notedesk.core.utils import now_ms
from notedesk.models.note import DEFAULT_TITLE, Note
from notedesk.repositories.note import NoteRepository
from notedesk.schemas.note import (
    LegacyNoteResponse,
    NoteSaveRequest,
    RemoveResult,
    SaveResult,
)
from notedesk.services.base import BaseService
from notedesk.services.compat import normalize_id, normalize_note, to_legacy_note


class NoteService(BaseService):
    """
    Service for note business logic.

    Stateless across calls; everything lives in the repository. Storage
    failures surface as ConflictError or DatabaseError.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)

    async def create(self) -> Note:
        """
        Create an empty note with a fresh UUID.

        Returns:
            The stored note (title "Untitled", empty content,
            createdAt == updatedAt)
        """
        now = now_ms()
        values = {
            "id": str(uuid4()),
            "title": DEFAULT_TITLE,
            "content": "",
            "created_at": now,
            "updated_at": now,
        }

        await self._execute_db_operation("create_note", self.repo.insert(values))

        self._log_operation("Note created", note_id=values["id"])
        return Note(**values)

    async def list_all(self) -> list[Note]:
        """Get every stored note in canonical form."""
        return await self._execute_db_operation("list_notes", self.repo.fetch_all())

    async def get_by_id(self, note_id: str) -> Note | None:
        """Get a note by id, or None when absent."""
        return await self._execute_db_operation(
            "get_note",
            self.repo.fetch_by_id(note_id),
        )

    async def get_note(self, note_id: str) -> Note:
        """
        Get a note by id.

        Raises:
            NotFoundError: If note not found
        """
        note = await self.get_by_id(note_id)
        if note is None:
            raise NotFoundError("Note not found")
        return note

    async def update_content(self, note_id: str, content: str) -> Note:
        """
        Replace a note's content and refresh updatedAt.

        The returned note is rebuilt from the arguments, not re-read:
        its title is the default placeholder and both timestamps are the
        time of this update.
        """
        now = now_ms()
        affected = await self._execute_db_operation(
            "update_note_content",
            self.repo.update_content(note_id, content, now),
        )

        if affected == 0:
            self._logger.warning(
                "Content update matched no note",
                extra={"service": self.__class__.__name__, "note_id": note_id},
            )
        else:
            self._log_debug("Note content updated", note_id=note_id)

        return Note(
            id=note_id,
            title=DEFAULT_TITLE,
            content=content,
            created_at=now,
            updated_at=now,
        )

    async def delete(self, note_id: str) -> int:
        """
        Delete a note. Unknown ids are not an error.

        Returns:
            Number of rows removed
        """
        deleted = await self._execute_db_operation(
            "delete_note",
            self.repo.delete(note_id),
        )
        self._log_operation("Note deleted", note_id=note_id, deleted=deleted)
        return deleted

    async def save(self, data: NoteSaveRequest) -> SaveResult:
        """
        Insert or update a note from a client-held copy.

        The payload is normalized first (string id, epoch timestamps,
        defaults). An existing note gets its content and updatedAt
        replaced, plus its title when the payload carries one; createdAt
        is never touched. The check-and-write is a single statement.

        Raises:
            ValidationError: If the id cannot be normalized
        """
        note = normalize_note(data, now_ms())

        await self._execute_db_operation(
            "save_note",
            self.repo.upsert(note, title=data.title),
        )

        self._log_operation("Note saved", note_id=note["id"])
        return SaveResult(success=True, id=note["id"])

    async def load(self) -> list[LegacyNoteResponse]:
        """Get every note in the legacy shape."""
        notes = await self.list_all()
        return [to_legacy_note(note) for note in notes]

    async def remove(self, note_id: int | str) -> RemoveResult:
        """
        Delete a note addressed by a legacy id.

        success is always true once the delete ran; deleted reports
        whether a row was actually removed.
        """
        deleted = await self.delete(normalize_id(note_id))
        return RemoveResult(success=True, deleted=deleted > 0)
