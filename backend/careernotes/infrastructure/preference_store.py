"""SQL Tone Preference Store — single-value tone setting in user_preferences.

Invariants:
    - Missing row reads as the default tone (professional)
    - Invalid stored values read as the default, with a warning (never raise on read)
    - set() upserts the single "tone" row
"""

import logging

from sqlalchemy import select

from careernotes.core.domain_types import Tone, DEFAULT_TONE
from careernotes.infrastructure.note_repository import SessionFactory
from careernotes.models.user_preference import UserPreference

logger = logging.getLogger(__name__)

TONE_KEY = "tone"


class SqlTonePreferenceStore:
    """TonePreferenceStore implementation backed by the user_preferences table."""

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    async def get(self) -> Tone:
        async with self._session_factory() as db:
            result = await db.execute(
                select(UserPreference).where(UserPreference.key == TONE_KEY),
            )
            row = result.scalar_one_or_none()
        if row is None:
            return DEFAULT_TONE
        try:
            return Tone(row.value)
        except ValueError:
            logger.warning(
                f"Stored tone preference '{row.value}' is invalid, using default",
                extra={"tone": row.value},
            )
            return DEFAULT_TONE

    async def set(self, tone: Tone) -> None:
        tone = Tone(tone)
        async with self._session_factory() as db:
            row = await db.get(UserPreference, TONE_KEY)
            if row is None:
                db.add(UserPreference(key=TONE_KEY, value=tone.value))
            else:
                row.value = tone.value
            await db.commit()
        logger.info("Tone preference updated", extra={"tone": tone.value})
