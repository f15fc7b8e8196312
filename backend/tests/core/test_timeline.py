"""Timeline — grouping by creation year."""

import uuid
from datetime import datetime, timezone

from careernotes.core.domain_types import EnhancementStatus, NoteId, NoteType
from careernotes.core.note_lifecycle import NoteRecord
from careernotes.core.timeline import group_by_year


def _note(year: int, title: str) -> NoteRecord:
    at = datetime(year, 6, 1, tzinfo=timezone.utc)
    return NoteRecord(
        id=NoteId(uuid.uuid4()), type=NoteType.SKILL, title=title,
        description="d", enhanced_description=None, is_enhancing=False,
        enhancement_status=EnhancementStatus.IDLE, created_at=at, updated_at=at,
    )


def test_groups_by_year_descending_keeping_order():
    notes = [_note(2024, "a"), _note(2026, "b"), _note(2024, "c")]
    groups = group_by_year(notes)
    assert [year for year, _ in groups] == [2026, 2024]
    assert [n.title for n in groups[1][1]] == ["a", "c"]


def test_empty_input_gives_no_groups():
    assert group_by_year([]) == []
