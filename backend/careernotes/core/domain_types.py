"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NoteId wraps UUID — never use bare UUID in domain logic
    - All closed sets (note types, tones, export types, statuses) encoded as Enums

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders, compare equal to raw strings
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

NoteId = NewType("NoteId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class NoteType(str, Enum):
    """Career note category — immutable after creation."""
    ACHIEVEMENT = "achievement"
    PROJECT = "project"
    FEEDBACK = "feedback"
    SKILL = "skill"


class Tone(str, Enum):
    """Enhancement tone preference."""
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    TECHNICAL = "technical"


DEFAULT_TONE = Tone.PROFESSIONAL


class LinkedInTone(str, Enum):
    """Tone of a LinkedIn export — independent of the enhancement tone."""
    NEUTRAL = "neutral"
    INSPIRING = "inspiring"
    TECHNICAL = "technical"


class ExportType(str, Enum):
    """Supported export documents."""
    CV = "cv"
    LINKEDIN = "linkedin"
    PROMOTION = "promotion"


class EnhancementStatus(str, Enum):
    """Per-note enhancement lifecycle — maps to DB `enhancement_status` column."""
    IDLE = "idle"
    ENHANCING = "enhancing"
    ENHANCED = "enhanced"
    FAILED = "failed"


class LifecycleEvent(str, Enum):
    """Events that drive EnhancementStatus transitions."""
    REQUESTED = "requested"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
