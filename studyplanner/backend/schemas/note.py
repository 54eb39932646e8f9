"""
Note Schemas.

Pydantic schemas for note API request/response validation.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class NoteView(str, Enum):
    """Mutually exclusive note listings."""

    DEFAULT = "default"
    ARCHIVE = "archive"
    DELETED = "deleted"


class NoteAction(str, Enum):
    """Flag transitions exposed as POST /notes/{id}/{action}."""

    ARCHIVE = "archive"
    UNARCHIVE = "unarchive"
    RESTORE = "restore"
    PIN = "pin"
    UNPIN = "unpin"


class NoteCreate(BaseModel):
    """Schema for creating a new note."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Note title",
        examples=["Week 3 lecture"],
    )
    content: str = Field(
        ...,
        min_length=1,
        max_length=100000,
        description="Note content",
        examples=["Dijkstra runs in O((V + E) log V) with a binary heap."],
    )
    course_tag: str | None = Field(
        default=None,
        max_length=100,
        description="Course the note belongs to. Blank means General.",
        examples=["CS201"],
    )


class NoteUpdate(BaseModel):
    """
    Merge-patch for a note.

    Only the fields present in the request are applied; omitted fields
    keep their current value. Fields may be omitted but not set to null.
    """

    title: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Note title",
    )
    content: str | None = Field(
        default=None,
        min_length=1,
        max_length=100000,
        description="Note content",
    )
    course_tag: str | None = Field(
        default=None,
        max_length=100,
        description="Course tag",
    )
    is_pinned: bool | None = Field(default=None, description="Pin status")
    is_archived: bool | None = Field(default=None, description="Archive status")
    is_deleted: bool | None = Field(default=None, description="Trash status")

    @model_validator(mode="after")
    def _reject_explicit_nulls(self) -> "NoteUpdate":
        nulls = sorted(name for name in self.model_fields_set if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(nulls)}")
        return self

    def changes(self) -> dict:
        """The fields the caller asked to change."""
        return self.model_dump(exclude_unset=True)


class NoteResponse(BaseModel):
    """Schema for note in API responses."""

    id: str = Field(description="Note unique identifier")
    owner_id: str = Field(description="Owning user")
    title: str = Field(description="Note title")
    content: str = Field(description="Note content")
    course_tag: str = Field(description="Course tag")
    is_pinned: bool = Field(description="Whether the note is pinned")
    is_archived: bool = Field(description="Whether the note is archived")
    is_deleted: bool = Field(description="Whether the note is in the trash")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(from_attributes=True)
