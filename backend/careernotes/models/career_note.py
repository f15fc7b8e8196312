"""CareerNote ORM — one row per user-authored career note.

Invariants:
    - id is UUID primary key, assigned at creation, immutable
    - type is one of achievement | project | feedback | skill
    - is_enhancing and enhancement_status always written together (core/note_lifecycle.py)
    - enhanced_description nullable; replaced wholesale, never partially written
    - updated_at bumped on every mutation

Design Decisions:
    - enhancement_status stored next to is_enhancing: the boolean is the public row
      contract, the status keeps the last outcome (enhanced vs failed) queryable
    - Composite index (type, created_at): list endpoint filters by type, newest first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from careernotes.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CareerNote(Base):
    """Career note row."""
    __tablename__ = "career_notes"
    __table_args__ = (
        Index("ix_career_notes_type_created_at", "type", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    enhanced_description: Mapped[str | None] = mapped_column(
        Text, nullable=True,
    )
    is_enhancing: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    enhancement_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="idle",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
        onupdate=_utcnow,
    )
