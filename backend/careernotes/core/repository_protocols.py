"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these records are never async themselves
    - update_fields returns bool: False means the row is gone, which the orchestrator
      treats as a no-op (never an insert)
"""

from typing import Protocol

from careernotes.core.domain_types import NoteId, NoteType, Tone
from careernotes.core.note_lifecycle import NoteRecord


class NoteRepository(Protocol):
    """Contract for career note persistence — implemented by shell."""
    async def create(self, fields: dict) -> NoteRecord: ...
    async def get(self, note_id: NoteId) -> NoteRecord | None: ...
    async def list_notes(
        self,
        note_type: NoteType | None = None,
        note_ids: list[NoteId] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[NoteRecord]: ...
    async def update_fields(self, note_id: NoteId, fields: dict) -> bool: ...
    async def delete(self, note_id: NoteId) -> bool: ...
    async def count_by_type(self) -> dict[NoteType, int]: ...
    async def reset_stale_enhancing(self, fields: dict) -> int: ...


class TonePreferenceStore(Protocol):
    """Contract for the single-value tone preference — implemented by shell."""
    async def get(self) -> Tone: ...
    async def set(self, tone: Tone) -> None: ...


class Enhancer(Protocol):
    """Enhancer capability — local rule engine or remote language model.

    Raises EnhancerUnavailableError or EnhancerTimeoutError on failure.
    """
    async def enhance(self, note: NoteRecord, tone: Tone) -> str: ...
