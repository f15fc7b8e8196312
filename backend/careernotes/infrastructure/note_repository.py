"""SQL Note Repository — NoteRepository over the career_notes table.

Invariants:
    - Every operation runs in its own session and commits before returning
      (background reconciliation cannot share the request session)
    - update_fields is UPDATE ... WHERE id = ? only; a missing row returns False, never inserts
    - Rows are mapped to core NoteRecord before leaving this module

Design Decisions:
    - session_factory is any zero-arg callable yielding an AsyncSession context manager:
      db_manager.session in production, async_sessionmaker in tests
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from careernotes.core.domain_types import NoteId, NoteType, EnhancementStatus
from careernotes.core.note_lifecycle import NoteRecord
from careernotes.models.career_note import CareerNote

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


def to_record(row: CareerNote) -> NoteRecord:
    return NoteRecord(
        id=NoteId(row.id),
        type=NoteType(row.type),
        title=row.title,
        description=row.description,
        enhanced_description=row.enhanced_description,
        is_enhancing=row.is_enhancing,
        enhancement_status=EnhancementStatus(row.enhancement_status),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlNoteRepository:
    """NoteRepository implementation backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def create(self, fields: dict) -> NoteRecord:
        async with self._session_factory() as db:
            row = CareerNote(**fields)
            db.add(row)
            await db.commit()
            await db.refresh(row)
            return to_record(row)

    async def get(self, note_id: NoteId) -> NoteRecord | None:
        async with self._session_factory() as db:
            result = await db.execute(
                select(CareerNote).where(CareerNote.id == note_id),
            )
            row = result.scalar_one_or_none()
            return to_record(row) if row else None

    async def list_notes(
        self,
        note_type: NoteType | None = None,
        note_ids: list[NoteId] | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[NoteRecord]:
        query = select(CareerNote).order_by(CareerNote.created_at.desc())
        if note_type is not None:
            query = query.where(CareerNote.type == NoteType(note_type).value)
        if note_ids is not None:
            query = query.where(CareerNote.id.in_(note_ids))
        if limit is not None:
            query = query.limit(limit)
        if offset:
            query = query.offset(offset)
        async with self._session_factory() as db:
            result = await db.execute(query)
            return [to_record(row) for row in result.scalars().all()]

    async def update_fields(self, note_id: NoteId, fields: dict) -> bool:
        async with self._session_factory() as db:
            result = await db.execute(
                update(CareerNote)
                .where(CareerNote.id == note_id)
                .values(**fields),
            )
            await db.commit()
            return result.rowcount > 0

    async def delete(self, note_id: NoteId) -> bool:
        async with self._session_factory() as db:
            result = await db.execute(
                delete(CareerNote).where(CareerNote.id == note_id),
            )
            await db.commit()
            return result.rowcount > 0

    async def count_by_type(self) -> dict[NoteType, int]:
        async with self._session_factory() as db:
            result = await db.execute(
                select(CareerNote.type, func.count()).group_by(CareerNote.type),
            )
            counts = {note_type: 0 for note_type in NoteType}
            for note_type, count in result.all():
                counts[NoteType(note_type)] = count
            return counts

    async def reset_stale_enhancing(self, fields: dict) -> int:
        """Apply `fields` to every row still flagged is_enhancing."""
        async with self._session_factory() as db:
            result = await db.execute(
                update(CareerNote)
                .where(CareerNote.is_enhancing.is_(True))
                .values(**fields),
            )
            await db.commit()
            if result.rowcount:
                logger.warning(
                    f"Settled {result.rowcount} note(s) left enhancing by a previous run",
                )
            return result.rowcount
