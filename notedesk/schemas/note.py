"""
Note Schemas.

Pydantic shapes exchanged with the presentation client.

Two conventions coexist:
    canonical - string id, integer epoch-millisecond timestamps
    legacy    - numeric id, datetime timestamps (older desktop client)

Field names go over the wire in camelCase (createdAt, updatedAt).
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class NoteResponse(BaseModel):
    """Canonical note. All five fields are always populated."""

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    created_at: int = Field(alias="createdAt", description="Creation time, epoch ms")
    updated_at: int = Field(alias="updatedAt", description="Last content change, epoch ms")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class NoteContentUpdate(BaseModel):
    """Body for replacing a note's content."""

    content: str = Field(
        description="New content, replaces the old content wholesale",
        examples=["Buy milk"],
    )


class NoteSaveRequest(BaseModel):
    """
    Note-shaped value accepted by the save operation.

    The id may be numeric (legacy client) or a string; timestamps may be
    epoch milliseconds or datetimes. Title and content may be omitted.
    """

    id: StrictInt | StrictStr = Field(description="Numeric or string note id")
    title: str | None = Field(default=None, description="Note title")
    content: str | None = Field(default=None, description="Note content")
    created_at: int | datetime | None = Field(default=None, alias="createdAt")
    updated_at: int | datetime | None = Field(default=None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LegacyNoteResponse(BaseModel):
    """Note in the legacy shape: numeric id when possible, datetime stamps."""

    id: int | str
    title: str
    content: str
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)


class SaveResult(BaseModel):
    """Outcome of a save."""

    success: bool = True
    id: str


class RemoveResult(BaseModel):
    """
    Outcome of a legacy remove.

    success is always true once the statement ran; deleted tells whether
    a row actually went away.
    """

    success: bool = True
    deleted: bool = False
