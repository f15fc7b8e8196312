"""Tone preference routes and their effect on the next enhancement."""

from careernotes.core.domain_types import Tone


async def test_default_tone_is_professional(client):
    response = await client.get("/api/v1/preferences/tone")
    assert response.status_code == 200
    assert response.json() == {"tone": "professional"}


async def test_set_tone_persists(client):
    response = await client.put("/api/v1/preferences/tone", json={"tone": "technical"})
    assert response.status_code == 200
    assert (await client.get("/api/v1/preferences/tone")).json() == {"tone": "technical"}


async def test_invalid_tone_rejected(client):
    response = await client.put("/api/v1/preferences/tone", json={"tone": "snarky"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TONE"
    assert (await client.get("/api/v1/preferences/tone")).json() == {"tone": "professional"}


async def test_new_note_enhanced_with_current_tone(client, settle, api_enhancer):
    await client.put("/api/v1/preferences/tone", json={"tone": "friendly"})

    await client.post(
        "/api/v1/notes",
        json={"type": "skill", "title": "Go", "description": "I learned Go"},
    )
    await settle()

    assert api_enhancer.calls[0][1] == Tone.FRIENDLY


async def test_tone_change_does_not_rewrite_existing_notes(client, settle):
    created = (await client.post(
        "/api/v1/notes",
        json={"type": "skill", "title": "Go", "description": "I learned Go"},
    )).json()
    await settle()
    before = (await client.get(f"/api/v1/notes/{created['id']}")).json()

    await client.put("/api/v1/preferences/tone", json={"tone": "technical"})

    after = (await client.get(f"/api/v1/notes/{created['id']}")).json()
    assert after == before
