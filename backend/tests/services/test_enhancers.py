"""Enhancers — local rule engine and Anthropic-backed implementations."""

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from careernotes.config import Settings
from careernotes.core.domain_types import EnhancementStatus, NoteId, NoteType, Tone
from careernotes.core.errors import EnhancerUnavailableError
from careernotes.core.note_lifecycle import NoteRecord
from careernotes.core.text_transformer import TextTransformer
from careernotes.services.enhancers import (
    AnthropicEnhancer, LocalEnhancer, build_enhancer,
)

from tests.services.fakes import NEVER_INJECT, FixedRandom


def _note(description="I built a data pipeline", note_type=NoteType.PROJECT):
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)
    return NoteRecord(
        id=NoteId(uuid.uuid4()),
        type=note_type,
        title="Pipeline",
        description=description,
        enhanced_description=None,
        is_enhancing=True,
        enhancement_status=EnhancementStatus.ENHANCING,
        created_at=now,
        updated_at=now,
    )


class _FakeResilientClient:
    """Records create_message kwargs and returns a canned response."""

    def __init__(self, blocks):
        self.blocks = blocks
        self.calls = []

    async def create_message(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(content=self.blocks)


def _text(text):
    return SimpleNamespace(type="text", text=text)


async def test_local_enhancer_applies_rules():
    enhancer = LocalEnhancer(TextTransformer(rng=FixedRandom(NEVER_INJECT)))

    text = await enhancer.enhance(_note(), Tone.TECHNICAL)

    assert text.startswith("Implemented and delivered a data pipeline")


async def test_anthropic_enhancer_sends_prompt_and_joins_text():
    client = _FakeResilientClient([_text("Built "), _text("a pipeline.")])
    enhancer = AnthropicEnhancer(client, model="claude-test", max_tokens=123)

    text = await enhancer.enhance(_note(), Tone.FRIENDLY)

    assert text == "Built a pipeline."
    call = client.calls[0]
    assert call["model"] == "claude-test"
    assert call["max_tokens"] == 123
    prompt = call["messages"][0]["content"]
    assert "I built a data pipeline" in prompt
    assert call["context"].tone == "friendly"


async def test_anthropic_enhancer_ignores_non_text_blocks():
    client = _FakeResilientClient([
        SimpleNamespace(type="thinking", thinking="..."), _text("Done."),
    ])
    text = await AnthropicEnhancer(client, "m").enhance(_note(), Tone.PROFESSIONAL)
    assert text == "Done."


async def test_anthropic_enhancer_empty_output_raises():
    client = _FakeResilientClient([_text("   ")])
    with pytest.raises(EnhancerUnavailableError):
        await AnthropicEnhancer(client, "m").enhance(_note(), Tone.PROFESSIONAL)


def test_build_enhancer_local_by_default():
    settings = Settings(enhancer_backend="local", impact_probability=0.0)
    enhancer = build_enhancer(settings)
    assert isinstance(enhancer, LocalEnhancer)
    assert enhancer.transformer.impact_probability == 0.0


def test_build_enhancer_anthropic():
    settings = Settings(
        enhancer_backend="anthropic", anthropic_model="claude-test",
    )
    enhancer = build_enhancer(settings)
    assert isinstance(enhancer, AnthropicEnhancer)
    assert enhancer.model == "claude-test"
