"""
Legacy Shape Compatibility.

Translates between the shapes callers send and the canonical shape the
store keeps:

    id          int or str          -> str
    timestamps  datetime or int     -> int (epoch milliseconds)

and back again for clients that still expect numeric ids and datetimes.
Nothing below the service layer ever sees a legacy value.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from notedesk.core.exceptions import ValidationError
from notedesk.models.note import Note
from notedesk.schemas.note import LegacyNoteResponse, NoteSaveRequest

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def normalize_id(value: Any) -> str:
    """
    Coerce a note id to its canonical string form.

    Accepts non-negative integers and non-empty strings (surrounding
    whitespace is dropped).

    Raises:
        ValidationError: For anything else, including bools and floats
    """
    if isinstance(value, bool):
        raise ValidationError("Invalid note id", details={"id": "Boolean is not an id"})

    if isinstance(value, int):
        if value < 0:
            raise ValidationError("Invalid note id", details={"id": "Must not be negative"})
        return str(value)

    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError("Invalid note id", details={"id": "Must not be empty"})
        return stripped

    raise ValidationError(
        "Invalid note id",
        details={"id": f"Unsupported type {type(value).__name__}"},
    )


def to_epoch_ms(value: int | datetime | None) -> int | None:
    """
    Convert a timestamp to epoch milliseconds.

    Naive datetimes are taken as UTC. None passes through.

    Raises:
        ValidationError: For negative epoch values
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        ms = (value - _EPOCH) // timedelta(milliseconds=1)
    else:
        ms = int(value)

    if ms < 0:
        raise ValidationError("Invalid timestamp", details={"timestamp": "Must not be negative"})
    return ms


def from_epoch_ms(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=ms)


def to_legacy_id(id: str) -> int | str:
    """
    Give back the numeric id older clients expect.

    Only ids that are the plain decimal spelling of an integer become
    ints; UUIDs and other strings (including "007") come back unchanged.
    """
    if id.isascii() and id.isdigit() and str(int(id)) == id:
        return int(id)
    return id


def normalize_note(data: NoteSaveRequest, now: int) -> dict[str, Any]:
    """
    Build the canonical row for a save request.

    Missing title and content become "", a missing updatedAt becomes
    ``now`` and a missing createdAt falls back to updatedAt. The
    timestamps are passed on as sent; keeping updatedAt at or above the
    stored createdAt is up to the repository.
    """
    updated_at = to_epoch_ms(data.updated_at)
    if updated_at is None:
        updated_at = now

    created_at = to_epoch_ms(data.created_at)
    if created_at is None:
        created_at = updated_at

    return {
        "id": normalize_id(data.id),
        "title": data.title or "",
        "content": data.content or "",
        "created_at": created_at,
        "updated_at": updated_at,
    }


def to_legacy_note(note: Note) -> LegacyNoteResponse:
    """Render a stored note in the legacy shape."""
    return LegacyNoteResponse(
        id=to_legacy_id(note.id),
        title=note.title,
        content=note.content,
        created_at=from_epoch_ms(note.created_at),
        updated_at=from_epoch_ms(note.updated_at),
    )
