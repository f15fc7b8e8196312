"""Timeline — groups notes by creation year, newest year first."""

from collections import defaultdict
from typing import Sequence

from careernotes.core.note_lifecycle import NoteRecord


def group_by_year(notes: Sequence[NoteRecord]) -> list[tuple[int, list[NoteRecord]]]:
    """Group notes by created_at year; years descending, input order kept inside a year."""
    grouped: dict[int, list[NoteRecord]] = defaultdict(list)
    for note in notes:
        grouped[note.created_at.year].append(note)
    return [(year, grouped[year]) for year in sorted(grouped, reverse=True)]
