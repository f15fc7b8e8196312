"""Enhancers — implementations of the Enhancer capability.

Invariants:
    - enhance(note, tone) returns non-empty text or raises
      EnhancerUnavailableError / EnhancerTimeoutError
    - LocalEnhancer is deterministic given its transformer's random source
    - AnthropicEnhancer sends one request per call; retries live in ResilientAnthropicClient

Design Decisions:
    - Both enhancers are interchangeable behind the Enhancer Protocol: the orchestrator
      never knows which backend produced the text
    - LocalEnhancer delay is optional simulated latency (0 in tests)
"""

import asyncio
import logging

from careernotes.config import Settings
from careernotes.core.domain_types import Tone
from careernotes.core.errors import EnhancerUnavailableError, ErrorContext
from careernotes.core.note_lifecycle import NoteRecord
from careernotes.core.prompts import ENHANCER_SYSTEM_PROMPT, build_enhancement_prompt
from careernotes.core.repository_protocols import Enhancer
from careernotes.core.text_transformer import TextTransformer, resolve_tone
from careernotes.infrastructure.anthropic_client import ResilientAnthropicClient

logger = logging.getLogger(__name__)


class LocalEnhancer:
    """Rule-engine enhancer (no network)."""

    def __init__(self, transformer: TextTransformer, delay_ms: int = 0):
        self.transformer = transformer
        self.delay_ms = delay_ms

    async def enhance(self, note: NoteRecord, tone: Tone) -> str:
        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)
        return self.transformer.enhance(note, tone)


class AnthropicEnhancer:
    """Language-model enhancer over the Anthropic Messages API."""

    def __init__(
        self, client: ResilientAnthropicClient, model: str, max_tokens: int = 400,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def enhance(self, note: NoteRecord, tone: Tone) -> str:
        resolved = resolve_tone(tone)
        context = ErrorContext(note_id=str(note.id), tone=resolved.value)
        response = await self.client.create_message(
            model=self.model,
            max_tokens=self.max_tokens,
            system=ENHANCER_SYSTEM_PROMPT,
            messages=[{
                "role": "user",
                "content": build_enhancement_prompt(note, resolved),
            }],
            context=context,
        )
        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise EnhancerUnavailableError(
                "Language model returned no text", context=context,
            )
        return text


def build_enhancer(settings: Settings) -> Enhancer:
    """Select the Enhancer backend from settings."""
    if settings.enhancer_backend == "anthropic":
        client = ResilientAnthropicClient(
            api_key=settings.anthropic_api_key,
            max_retries=settings.anthropic_max_retries,
            base_delay_ms=settings.anthropic_base_delay_ms,
            max_delay_ms=settings.anthropic_max_delay_ms,
            timeout_seconds=settings.anthropic_timeout_seconds,
        )
        logger.info(f"Using Anthropic enhancer ({settings.anthropic_model})")
        return AnthropicEnhancer(
            client, settings.anthropic_model, settings.anthropic_max_tokens,
        )
    logger.info("Using local rule-engine enhancer")
    return LocalEnhancer(
        TextTransformer(impact_probability=settings.impact_probability),
        delay_ms=settings.local_enhancer_delay_ms,
    )
