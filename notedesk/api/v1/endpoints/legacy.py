"""
Legacy Notes API Endpoints.

Save/load/remove as the older desktop client calls them: numeric ids,
datetime timestamps, bare result objects instead of the ApiResponse
envelope.
"""

from fastapi import APIRouter

from notedesk.core.dependencies import DbSession
from notedesk.schemas.note import (
    LegacyNoteResponse,
    NoteSaveRequest,
    RemoveResult,
    SaveResult,
)
from notedesk.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=SaveResult,
    summary="Save a note",
    description="Insert the note, or update content (and title, if sent) when the id exists.",
)
async def save_note(data: NoteSaveRequest, db: DbSession) -> SaveResult:
    """Save a client-held note."""
    service = NoteService(db)
    return await service.save(data)


@router.get(
    "",
    response_model=list[LegacyNoteResponse],
    summary="Load notes",
    description="Get every note in the legacy shape.",
)
async def load_notes(db: DbSession) -> list[LegacyNoteResponse]:
    """Load all notes."""
    service = NoteService(db)
    return await service.load()


@router.delete(
    "/{note_id}",
    response_model=RemoveResult,
    summary="Remove a note",
    description=(
        "Delete a note by the id loadNotes returned, numeric or string. "
        "Succeeds even if nothing was deleted."
    ),
)
async def remove_note(note_id: int | str, db: DbSession) -> RemoveResult:
    """Remove a note by legacy id."""
    service = NoteService(db)
    return await service.remove(note_id)
