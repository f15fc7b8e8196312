"""Export Schemas — request/response for document generation.

Invariants:
    - type is a free string here; unknown values are rejected by the core with
      INVALID_EXPORT_TYPE rather than a generic schema error
    - tone only meaningful for linkedin
"""

from uuid import UUID

from pydantic import BaseModel, Field


class ExportRequest(BaseModel):
    type: str = Field(min_length=1)
    tone: str | None = None
    note_ids: list[UUID] | None = Field(
        None, description="Export only these notes; all notes when omitted",
    )


class ExportResponse(BaseModel):
    content: str
    type: str
    tone: str | None = None
