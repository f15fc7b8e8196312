"""Notes — create, list, edit-and-regenerate and delete career notes.

Invariants:
    - POST returns 201 with is_enhancing=True; enhancement continues in the background
    - PATCH and /regenerate return 202; 409 when an enhancement is already in flight
    - DELETE never waits for an in-flight enhancement (reconciliation becomes a no-op)
    - Domain errors propagate to the global CareerNotesError handler

Design Decisions:
    - /timeline declared before /{note_id} so the literal path wins
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from careernotes.api.dependencies import get_note_repository, get_orchestrator
from careernotes.core.domain_types import NoteId, NoteType
from careernotes.core.errors import ResourceNotFoundError
from careernotes.core.note_lifecycle import NoteForm
from careernotes.core.repository_protocols import NoteRepository
from careernotes.core.timeline import group_by_year
from careernotes.schemas.note import (
    NoteCreate,
    NoteListResponse,
    NoteResponse,
    NoteTypeLiteral,
    NoteUpdate,
    TimelineYear,
)
from careernotes.services.enhancement_orchestrator import EnhancementOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/notes", tags=["notes"])


@router.post(
    "", response_model=NoteResponse, status_code=status.HTTP_201_CREATED,
)
async def create_note(
    body: NoteCreate,
    orchestrator: EnhancementOrchestrator = Depends(get_orchestrator),
):
    """Create a note; enhancement runs in the background."""
    note = await orchestrator.create_and_enhance(
        NoteForm(type=body.type, title=body.title, description=body.description),
    )
    return NoteResponse.from_record(note)


@router.get("", response_model=NoteListResponse)
async def list_notes(
    note_type: NoteTypeLiteral | None = Query(None, alias="type"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    repository: NoteRepository = Depends(get_note_repository),
):
    """List notes newest first, with per-type counts across all notes."""
    notes = await repository.list_notes(
        note_type=NoteType(note_type) if note_type else None,
        limit=limit, offset=offset,
    )
    counts = await repository.count_by_type()
    return NoteListResponse(
        notes=[NoteResponse.from_record(n) for n in notes],
        counts={t.value: c for t, c in counts.items()},
        total=sum(counts.values()),
    )


@router.get("/timeline", response_model=list[TimelineYear])
async def timeline(
    repository: NoteRepository = Depends(get_note_repository),
):
    """Notes grouped by creation year, most recent year first."""
    notes = await repository.list_notes()
    return [
        TimelineYear(
            year=year, notes=[NoteResponse.from_record(n) for n in year_notes],
        )
        for year, year_notes in group_by_year(notes)
    ]


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    repository: NoteRepository = Depends(get_note_repository),
):
    note = await repository.get(NoteId(note_id))
    if note is None:
        raise ResourceNotFoundError("Note", str(note_id))
    return NoteResponse.from_record(note)


@router.patch(
    "/{note_id}", response_model=NoteResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def edit_note(
    note_id: UUID,
    body: NoteUpdate,
    orchestrator: EnhancementOrchestrator = Depends(get_orchestrator),
):
    """Edit title/description and regenerate the enhanced text."""
    note = await orchestrator.regenerate(
        NoteId(note_id), title=body.title, description=body.description,
    )
    return NoteResponse.from_record(note)


@router.post(
    "/{note_id}/regenerate", response_model=NoteResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def regenerate_note(
    note_id: UUID,
    orchestrator: EnhancementOrchestrator = Depends(get_orchestrator),
):
    """Re-run enhancement with the current tone preference."""
    note = await orchestrator.regenerate(NoteId(note_id))
    return NoteResponse.from_record(note)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    repository: NoteRepository = Depends(get_note_repository),
):
    if not await repository.delete(NoteId(note_id)):
        raise ResourceNotFoundError("Note", str(note_id))
    logger.info("Note deleted", extra={"note_id": note_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
