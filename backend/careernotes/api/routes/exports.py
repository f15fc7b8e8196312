"""Exports — CV section, LinkedIn post and promotion case from stored notes.

Invariants:
    - Reads notes once, then runs the pure generator (no enhancer calls)
    - Unknown type → 400 INVALID_EXPORT_TYPE; no partial document is returned
    - Response tone is echoed only for linkedin
"""

import logging

from fastapi import APIRouter, Depends

from careernotes.api.dependencies import get_note_repository
from careernotes.core.domain_types import ExportType, LinkedInTone, NoteId
from careernotes.core.export_generator import ExportOptions, generate_export
from careernotes.core.repository_protocols import NoteRepository
from careernotes.schemas.export import ExportRequest, ExportResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/exports", tags=["exports"])


@router.post("", response_model=ExportResponse)
async def create_export(
    body: ExportRequest,
    repository: NoteRepository = Depends(get_note_repository),
):
    note_ids = (
        [NoteId(i) for i in body.note_ids] if body.note_ids is not None else None
    )
    notes = await repository.list_notes(note_ids=note_ids)
    options = ExportOptions(type=body.type, tone=body.tone)
    content = generate_export(notes, options)
    logger.info(
        f"Export generated from {len(notes)} note(s)",
        extra={"export_type": body.type, "tone": body.tone},
    )
    tone = None
    if body.type == ExportType.LINKEDIN.value:
        tone = body.tone or LinkedInTone.NEUTRAL.value
    return ExportResponse(content=content, type=body.type, tone=tone)
