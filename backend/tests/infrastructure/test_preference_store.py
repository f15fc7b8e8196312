"""SqlTonePreferenceStore — default, upsert, and invalid stored values."""

import pytest

from careernotes.core.domain_types import Tone
from careernotes.infrastructure.preference_store import TONE_KEY, SqlTonePreferenceStore
from careernotes.models.user_preference import UserPreference


@pytest.fixture
def store(test_session_factory):
    return SqlTonePreferenceStore(test_session_factory)


async def test_missing_row_reads_default(store):
    assert await store.get() == Tone.PROFESSIONAL


async def test_set_then_get(store):
    await store.set(Tone.FRIENDLY)
    assert await store.get() == Tone.FRIENDLY

    await store.set(Tone.TECHNICAL)
    assert await store.get() == Tone.TECHNICAL


async def test_invalid_stored_value_reads_default(store, test_session_factory, caplog):
    async with test_session_factory() as db:
        db.add(UserPreference(key=TONE_KEY, value="sarcastic"))
        await db.commit()

    with caplog.at_level("WARNING"):
        assert await store.get() == Tone.PROFESSIONAL
    assert any("invalid" in r.message for r in caplog.records)
