"""Note Lifecycle — CareerNote data contract and enhancement state transitions.

Invariants:
    - is_enhancing is True iff enhancement_status == ENHANCING (field builders keep them in lockstep)
    - enhanced_description is only written by success_fields(); failure never touches it
    - Requesting an enhancement while one is in flight raises AlreadyInProgressError;
      an ENHANCING row the caller marks stale restarts its cycle instead
    - Terminal states (ENHANCED, FAILED) are valid starting points for a new cycle

Design Decisions:
    - Transition table as a dict: every legal move visible in one place, illegal moves raise
    - Field builders return plain dicts: the repository applies them as a single UPDATE,
      so a reconciliation is one logical write
"""

from dataclasses import dataclass, replace
from datetime import datetime

from careernotes.core.domain_types import (
    NoteId, NoteType, EnhancementStatus, LifecycleEvent,
)
from careernotes.core.errors import (
    NoteValidationError, AlreadyInProgressError, InvalidTransitionError,
)


@dataclass(frozen=True)
class NoteForm:
    """User-submitted note content (create or edit)."""
    type: str
    title: str
    description: str


@dataclass(frozen=True)
class NoteRecord:
    """Persisted career note as seen by the core."""
    id: NoteId
    type: NoteType
    title: str
    description: str
    enhanced_description: str | None
    is_enhancing: bool
    enhancement_status: EnhancementStatus
    created_at: datetime
    updated_at: datetime


_TRANSITIONS: dict[tuple[EnhancementStatus, LifecycleEvent], EnhancementStatus] = {
    (EnhancementStatus.IDLE, LifecycleEvent.REQUESTED): EnhancementStatus.ENHANCING,
    (EnhancementStatus.ENHANCED, LifecycleEvent.REQUESTED): EnhancementStatus.ENHANCING,
    (EnhancementStatus.FAILED, LifecycleEvent.REQUESTED): EnhancementStatus.ENHANCING,
    (EnhancementStatus.ENHANCING, LifecycleEvent.SUCCEEDED): EnhancementStatus.ENHANCED,
    (EnhancementStatus.ENHANCING, LifecycleEvent.FAILED): EnhancementStatus.FAILED,
}


def next_status(
    current: EnhancementStatus, event: LifecycleEvent, note_id: str = "",
) -> EnhancementStatus:
    """Return the status reached from `current` on `event`."""
    if current == EnhancementStatus.ENHANCING and event == LifecycleEvent.REQUESTED:
        raise AlreadyInProgressError(note_id)
    try:
        return _TRANSITIONS[(current, event)]
    except KeyError:
        raise InvalidTransitionError(current.value, event.value)


def validate_note_form(form: NoteForm) -> NoteForm:
    """Strip and validate a note form. Raises NoteValidationError."""
    try:
        NoteType(form.type)
    except ValueError:
        raise NoteValidationError(
            f"Unknown note type: '{form.type}'", "type",
        )
    title = (form.title or "").strip()
    description = (form.description or "").strip()
    if not title:
        raise NoteValidationError("title cannot be empty", "title")
    if not description:
        raise NoteValidationError("description cannot be empty", "description")
    return replace(form, title=title, description=description)


def creation_fields(form: NoteForm) -> dict:
    """Column values for an optimistic create — always starts ENHANCING."""
    return {
        "type": NoteType(form.type).value,
        "title": form.title,
        "description": form.description,
        "enhanced_description": None,
        "is_enhancing": True,
        "enhancement_status": EnhancementStatus.ENHANCING.value,
    }


def request_fields(
    record: NoteRecord,
    title: str | None = None,
    description: str | None = None,
    stale: bool = False,
) -> dict:
    """Column values that open a regeneration cycle, optionally with edited content.

    stale=True means the caller knows no enhancement is running for this note, so a
    stored ENHANCING row is a leftover (failed write, crashed task) and is restarted
    as if it had failed.
    """
    current = record.enhancement_status
    if stale and current == EnhancementStatus.ENHANCING:
        current = EnhancementStatus.FAILED
    next_status(current, LifecycleEvent.REQUESTED, str(record.id))
    fields: dict = {
        "is_enhancing": True,
        "enhancement_status": EnhancementStatus.ENHANCING.value,
    }
    if title is not None:
        title = title.strip()
        if not title:
            raise NoteValidationError("title cannot be empty", "title")
        fields["title"] = title
    if description is not None:
        description = description.strip()
        if not description:
            raise NoteValidationError("description cannot be empty", "description")
        fields["description"] = description
    return fields


def success_fields(enhanced_text: str) -> dict:
    """Reconciliation on success: replace enhanced text wholesale, clear pending flag."""
    next_status(EnhancementStatus.ENHANCING, LifecycleEvent.SUCCEEDED)
    return {
        "enhanced_description": enhanced_text,
        "is_enhancing": False,
        "enhancement_status": EnhancementStatus.ENHANCED.value,
    }


def failure_fields() -> dict:
    """Reconciliation on failure: clear pending flag, keep previous enhanced text."""
    next_status(EnhancementStatus.ENHANCING, LifecycleEvent.FAILED)
    return {
        "is_enhancing": False,
        "enhancement_status": EnhancementStatus.FAILED.value,
    }
