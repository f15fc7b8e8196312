"""API Dependencies — process-wide orchestrator and its collaborators.

Invariants:
    - One EnhancementOrchestrator per process (in-flight registry is in-memory)
    - Repository and tone store are reached through the orchestrator, so overriding
      get_orchestrator in tests swaps the whole graph

Design Decisions:
    - Module-level singleton set from the lifespan, same pattern as db_manager
      (single-process uvicorn; the in-flight registry is not shared across workers)
"""

from fastapi import Depends

from careernotes.core.repository_protocols import NoteRepository, TonePreferenceStore
from careernotes.services.enhancement_orchestrator import EnhancementOrchestrator

_orchestrator: EnhancementOrchestrator | None = None


def set_orchestrator(orchestrator: EnhancementOrchestrator | None) -> None:
    global _orchestrator
    _orchestrator = orchestrator


def get_orchestrator() -> EnhancementOrchestrator:
    if _orchestrator is None:
        raise RuntimeError("Orchestrator not initialized")
    return _orchestrator


def get_note_repository(
    orchestrator: EnhancementOrchestrator = Depends(get_orchestrator),
) -> NoteRepository:
    return orchestrator.repository


def get_tone_store(
    orchestrator: EnhancementOrchestrator = Depends(get_orchestrator),
) -> TonePreferenceStore:
    return orchestrator.tone_store
