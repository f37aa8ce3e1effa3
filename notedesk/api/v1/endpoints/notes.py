"""
Notes API Endpoints.

Canonical note operations: string ids, epoch-millisecond timestamps.
"""

from fastapi import APIRouter

from notedesk.core.dependencies import DbSession, RequestId
from notedesk.schemas.base import ApiResponse, ResponseMetadata
from notedesk.schemas.note import NoteContentUpdate, NoteResponse
from notedesk.services.note import NoteService

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[NoteResponse],
    status_code=201,
    summary="Create a note",
    description="Create an empty note with a generated id.",
)
async def create_note(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Create a new note."""
    service = NoteService(db)
    note = await service.create()
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "",
    response_model=ApiResponse[list[NoteResponse]],
    summary="List notes",
    description="Get every note. No particular order.",
)
async def get_all_notes(
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[list[NoteResponse]]:
    """List all notes."""
    service = NoteService(db)
    notes = await service.list_all()
    return ApiResponse(
        data=[NoteResponse.model_validate(note) for note in notes],
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/{note_id}",
    response_model=ApiResponse[NoteResponse],
    summary="Get a note",
    description="Get a single note by ID.",
)
async def get_note_by_id(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Get a note by ID."""
    service = NoteService(db)
    note = await service.get_note(note_id)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.put(
    "/{note_id}/content",
    response_model=ApiResponse[NoteResponse],
    summary="Update note content",
    description=(
        "Replace a note's content. The returned title is a placeholder, "
        "not the stored title."
    ),
)
async def update_note_content(
    note_id: str,
    data: NoteContentUpdate,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[NoteResponse]:
    """Replace a note's content."""
    service = NoteService(db)
    note = await service.update_content(note_id, data.content)
    return ApiResponse(
        data=NoteResponse.model_validate(note),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    summary="Delete a note",
    description="Permanently delete a note. Deleting an unknown id succeeds.",
)
async def delete_note(
    note_id: str,
    db: DbSession,
    request_id: RequestId,
) -> None:
    """Delete a note."""
    service = NoteService(db)
    await service.delete(note_id)
