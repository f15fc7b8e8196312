"""Enhancement Orchestrator — optimistic create, background enhancement, reconciliation.

Invariants:
    - Note row is committed (is_enhancing=True) before the enhancer is invoked
    - create_and_enhance / regenerate return without waiting for the enhancer
    - At most one enhancement in flight per note id; a second regenerate request is
      rejected with AlreadyInProgressError (no queueing). The claim set decides what
      is in flight; a stored ENHANCING row with no claim is stale and may be restarted
    - Tone is read before the row is touched; a failure after the row flips to
      ENHANCING settles it to FAILED best-effort
    - Success writes enhanced_description + clears the flag in one UPDATE;
      failure clears the flag only
    - Reconciliation against a deleted note is a logged no-op (UPDATE WHERE id, never INSERT)
    - Tone is read once per call and threaded into the task (no mid-flight re-read)
    - Enhancer failures are logged and swallowed; they never surface to the caller

Design Decisions:
    - Claim set updated synchronously before the first await: two concurrent
      regenerate calls cannot both pass the in-flight check
    - Claim released inside the task right after the reconciliation write, not in
      the done-callback, so a regenerate never sees a settled row still claimed
    - asyncio tasks held in a dict until done: no garbage-collected fire-and-forget,
      and drain() can await them on shutdown or in tests
    - No retry on failure: the note settles to FAILED and the user can regenerate
"""

import asyncio
import logging

from careernotes.core.domain_types import NoteId, Tone
from careernotes.core.errors import (
    AlreadyInProgressError,
    CareerNotesError,
    EnhancerTimeoutError,
    EnhancerUnavailableError,
    ResourceNotFoundError,
)
from careernotes.core.note_lifecycle import (
    NoteForm,
    NoteRecord,
    creation_fields,
    failure_fields,
    request_fields,
    success_fields,
    validate_note_form,
)
from careernotes.core.repository_protocols import (
    Enhancer, NoteRepository, TonePreferenceStore,
)

logger = logging.getLogger(__name__)


class EnhancementOrchestrator:
    """Coordinates note creation/regeneration with the Enhancer capability."""

    def __init__(
        self,
        repository: NoteRepository,
        enhancer: Enhancer,
        tone_store: TonePreferenceStore,
        timeout_seconds: float = 30.0,
    ):
        self.repository = repository
        self.enhancer = enhancer
        self.tone_store = tone_store
        self.timeout_seconds = timeout_seconds
        self._claimed: set[NoteId] = set()
        self._tasks: dict[NoteId, asyncio.Task] = {}

    # ─── Public operations ──────────────────────────────────────

    async def create_and_enhance(self, form: NoteForm) -> NoteRecord:
        """Persist a pending note and start its enhancement in the background."""
        form = validate_note_form(form)
        tone = await self.tone_store.get()
        note = await self.repository.create(creation_fields(form))
        self._claimed.add(note.id)
        self._spawn(note, tone)
        logger.info(
            "Note created, enhancement scheduled",
            extra={"note_id": note.id, "tone": tone.value},
        )
        return note

    async def regenerate(
        self,
        note_id: NoteId,
        title: str | None = None,
        description: str | None = None,
    ) -> NoteRecord:
        """Reset a note to pending (optionally editing it) and re-run enhancement."""
        if note_id in self._claimed:
            raise AlreadyInProgressError(str(note_id))
        self._claimed.add(note_id)
        try:
            tone = await self.tone_store.get()
            note = await self._open_cycle(note_id, title, description)
        except BaseException:
            self._claimed.discard(note_id)
            raise
        self._spawn(note, tone)
        logger.info(
            "Regeneration scheduled",
            extra={"note_id": note_id, "tone": tone.value},
        )
        return note

    def is_in_flight(self, note_id: NoteId) -> bool:
        return note_id in self._claimed

    async def drain(self) -> None:
        """Wait for every in-flight enhancement to reconcile."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks.values()), return_exceptions=True)

    async def recover_stale(self) -> int:
        """Settle rows left enhancing by a previous process. Call before serving."""
        return await self.repository.reset_stale_enhancing(failure_fields())

    # ─── Internals ──────────────────────────────────────────────

    async def _open_cycle(
        self, note_id: NoteId, title: str | None, description: str | None,
    ) -> NoteRecord:
        note = await self.repository.get(note_id)
        if note is None:
            raise ResourceNotFoundError("Note", str(note_id))
        # Caller holds the claim: a stored ENHANCING row has no live task behind it
        fields = request_fields(note, title=title, description=description, stale=True)
        if not await self.repository.update_fields(note_id, fields):
            raise ResourceNotFoundError("Note", str(note_id))
        try:
            refreshed = await self.repository.get(note_id)
        except CareerNotesError:
            await self._apply(note_id, failure_fields())
            raise
        if refreshed is None:
            raise ResourceNotFoundError("Note", str(note_id))
        return refreshed

    def _spawn(self, note: NoteRecord, tone: Tone) -> None:
        task = asyncio.create_task(
            self._enhance_and_reconcile(note, tone),
            name=f"enhance-{note.id}",
        )
        self._tasks[note.id] = task
        task.add_done_callback(lambda _t, note_id=note.id: self._tasks.pop(note_id, None))

    async def _enhance_and_reconcile(self, note: NoteRecord, tone: Tone) -> None:
        try:
            await self._run_cycle(note, tone)
        finally:
            # Released in the same step as the reconciliation write
            self._claimed.discard(note.id)

    async def _run_cycle(self, note: NoteRecord, tone: Tone) -> None:
        try:
            text = await asyncio.wait_for(
                self.enhancer.enhance(note, tone), timeout=self.timeout_seconds,
            )
            if not text or not text.strip():
                raise EnhancerUnavailableError("Enhancer returned empty text")
        except asyncio.TimeoutError:
            await self._reconcile_failure(
                note.id, EnhancerTimeoutError(self.timeout_seconds),
            )
            return
        except (EnhancerUnavailableError, EnhancerTimeoutError) as e:
            await self._reconcile_failure(note.id, e)
            return
        except Exception as e:
            await self._reconcile_failure(
                note.id, EnhancerUnavailableError(f"Enhancer raised: {e}"),
            )
            return
        await self._reconcile_success(note.id, text.strip())

    async def _reconcile_success(self, note_id: NoteId, text: str) -> None:
        applied = await self._apply(note_id, success_fields(text))
        if applied:
            logger.info(
                "Enhancement stored",
                extra={"note_id": note_id, "enhancement_status": "enhanced"},
            )

    async def _reconcile_failure(
        self, note_id: NoteId, error: CareerNotesError,
    ) -> None:
        logger.warning(
            f"Enhancement failed: {error.message}",
            extra={"note_id": note_id, "error_code": error.code},
        )
        await self._apply(note_id, failure_fields())

    async def _apply(self, note_id: NoteId, fields: dict) -> bool:
        try:
            applied = await self.repository.update_fields(note_id, fields)
        except CareerNotesError as e:
            logger.error(
                f"Reconciliation write failed: {e.message}",
                extra={"note_id": note_id, "error_code": e.code},
                exc_info=True,
            )
            return False
        if not applied:
            logger.info(
                "Note deleted before enhancement finished, skipping write",
                extra={"note_id": note_id},
            )
        return applied
