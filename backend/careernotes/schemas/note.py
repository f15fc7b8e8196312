"""Note Schemas — Pydantic models for note create/edit/read at the API boundary.

Invariants:
    - NoteCreate.type restricted to the four note types
    - Blank title/description pass the schema and are rejected by the core
      (NoteValidationError), so HTTP and direct callers see one error shape
    - NoteResponse mirrors the persisted row contract

Design Decisions:
    - Literal type for note type over str enum: Pydantic handles validation natively
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from careernotes.core.note_lifecycle import NoteRecord

NoteTypeLiteral = Literal["achievement", "project", "feedback", "skill"]


class NoteCreate(BaseModel):
    type: NoteTypeLiteral
    title: str = Field(max_length=200)
    description: str = Field(max_length=5000)


class NoteUpdate(BaseModel):
    """Edit-and-regenerate payload; omitted fields keep their current value."""
    title: str | None = Field(None, max_length=200)
    description: str | None = Field(None, max_length=5000)


class NoteResponse(BaseModel):
    id: UUID
    type: NoteTypeLiteral
    title: str
    description: str
    enhanced_description: str | None = None
    is_enhancing: bool
    enhancement_status: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_record(cls, note: NoteRecord) -> "NoteResponse":
        return cls(
            id=note.id,
            type=note.type.value,
            title=note.title,
            description=note.description,
            enhanced_description=note.enhanced_description,
            is_enhancing=note.is_enhancing,
            enhancement_status=note.enhancement_status.value,
            created_at=note.created_at,
            updated_at=note.updated_at,
        )


class NoteListResponse(BaseModel):
    notes: list[NoteResponse]
    counts: dict[str, int]
    total: int


class TimelineYear(BaseModel):
    year: int
    notes: list[NoteResponse]
