"""Preferences — read and update the tone preference.

Invariants:
    - Changing the tone never rewrites stored enhanced descriptions
"""

from fastapi import APIRouter, Depends

from careernotes.api.dependencies import get_tone_store
from careernotes.core.domain_types import Tone
from careernotes.core.errors import InvalidToneError
from careernotes.core.repository_protocols import TonePreferenceStore
from careernotes.schemas.preferences import TonePreference

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


@router.get("/tone", response_model=TonePreference)
async def get_tone(store: TonePreferenceStore = Depends(get_tone_store)):
    return TonePreference(tone=(await store.get()).value)


@router.put("/tone", response_model=TonePreference)
async def set_tone(
    body: TonePreference,
    store: TonePreferenceStore = Depends(get_tone_store),
):
    try:
        tone = Tone(body.tone)
    except ValueError:
        raise InvalidToneError(body.tone)
    await store.set(tone)
    return TonePreference(tone=tone.value)
