"""Text Transformer — rule engine that rewrites a raw career note into a tone-adjusted statement.

Invariants:
    - Rules evaluated in declaration order; first match wins, at most one rewrite
    - Only the matched span is rewritten (text before the match is preserved)
    - Unknown tones fall back to professional templates, markers, framing and impact phrases
    - Impact clause appended at most once, never when the text already contains "%"
    - The only nondeterminism is the injected random source (random() + choice())

Design Decisions:
    - Templates keyed by (category, tone) in one table: adding a tone is a data change
    - Replacement via callable, not template string: user text containing backslashes
      or group references is inserted verbatim
    - Random draw happens on every call, before the "%" check: a seeded source
      advances identically regardless of input
"""

import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from careernotes.core.domain_types import Tone, DEFAULT_TONE

IMPACT_PROBABILITY = 0.5


class RandomSource(Protocol):
    """Subset of random.Random used by the transformer."""
    def random(self) -> float: ...
    def choice(self, seq): ...


class Category(str, Enum):
    """Semantic category of a first-person phrasing."""
    ACHIEVEMENT = "achievement"
    LEARNING = "learning"
    SUPPORT = "support"
    FEEDBACK = "feedback"
    COMPLETION = "completion"


@dataclass(frozen=True)
class Rule:
    category: Category
    pattern: re.Pattern


RULES: tuple[Rule, ...] = (
    Rule(Category.ACHIEVEMENT, re.compile(
        r"\bI (?:did|made|created|built|worked on) (?P<subject>.+)", re.IGNORECASE,
    )),
    Rule(Category.LEARNING, re.compile(
        r"\bI (?:learned|studied|took) (?P<subject>.+)", re.IGNORECASE,
    )),
    Rule(Category.SUPPORT, re.compile(
        r"\bI (?:helped|assisted|supported) (?P<subject>.+)", re.IGNORECASE,
    )),
    Rule(Category.FEEDBACK, re.compile(
        r"\bI (?:received|got) (?P<subject>.+) feedback", re.IGNORECASE,
    )),
    Rule(Category.COMPLETION, re.compile(
        r"\bI (?:completed|finished) (?P<subject>.+)", re.IGNORECASE,
    )),
)


TEMPLATES: dict[Tone, dict[Category, str]] = {
    Tone.PROFESSIONAL: {
        Category.ACHIEVEMENT: (
            "Successfully delivered {subject}, demonstrating strong technical "
            "execution and project management skills"
        ),
        Category.LEARNING: (
            "Acquired expertise in {subject}, expanding technical capabilities "
            "and professional knowledge base"
        ),
        Category.SUPPORT: (
            "Provided strategic support for {subject}, contributing to team "
            "success and operational efficiency"
        ),
        Category.FEEDBACK: (
            "Earned recognition through {subject} performance feedback, "
            "validating professional excellence and impact"
        ),
        Category.COMPLETION: (
            "Successfully completed {subject}, delivering measurable results "
            "and exceeding project expectations"
        ),
    },
    Tone.FRIENDLY: {
        Category.ACHIEVEMENT: (
            "Had the opportunity to work on {subject}, which was both "
            "challenging and rewarding"
        ),
        Category.LEARNING: (
            "Really enjoyed diving into {subject} and picking up new skills "
            "along the way"
        ),
        Category.SUPPORT: (
            "Loved pitching in on {subject} and being part of a great team effort"
        ),
        Category.FEEDBACK: (
            "Was grateful to receive {subject} feedback, which was really "
            "encouraging"
        ),
        Category.COMPLETION: (
            "Wrapped up {subject}, and it felt great to see everything come "
            "together"
        ),
    },
    Tone.TECHNICAL: {
        Category.ACHIEVEMENT: (
            "Implemented and delivered {subject}, utilizing advanced technical "
            "methodologies and engineering best practices"
        ),
        Category.LEARNING: (
            "Developed technical proficiency in {subject}, strengthening "
            "engineering depth and system design knowledge"
        ),
        Category.SUPPORT: (
            "Provided technical support for {subject}, resolving engineering "
            "blockers and improving system reliability"
        ),
        Category.FEEDBACK: (
            "Received {subject} technical feedback, validating code quality "
            "and architectural decisions"
        ),
        Category.COMPLETION: (
            "Completed {subject}, meeting technical specifications and "
            "delivery milestones"
        ),
    },
}


# Fallback framing is skipped when the text already carries one of these words
MARKER_WORDS: dict[Tone, tuple[str, ...]] = {
    Tone.PROFESSIONAL: ("demonstrated", "achieved", "delivered"),
    Tone.FRIENDLY: ("enjoyed", "grateful", "excited"),
    Tone.TECHNICAL: ("implemented", "engineered", "optimized"),
}

FRAMING: dict[Tone, str] = {
    Tone.PROFESSIONAL: "Demonstrated professional excellence through {text}",
    Tone.FRIENDLY: "Really enjoyed {text}, and it was a great experience",
    Tone.TECHNICAL: "Engineered a solution through {text}",
}

IMPACT_PHRASES: dict[Tone, tuple[str, ...]] = {
    Tone.PROFESSIONAL: (
        "improving efficiency by 15%",
        "reducing processing time by 25%",
        "increasing team productivity by 20%",
        "enhancing user satisfaction by 30%",
        "streamlining workflows by 40%",
        "optimizing performance by 18%",
    ),
    Tone.FRIENDLY: (
        "helping the team save about 15% of our time",
        "cutting wait times by 25%",
        "boosting team morale by 20%",
        "making our users 30% happier",
        "making everyday work 40% smoother",
        "speeding things up by 18%",
    ),
    Tone.TECHNICAL: (
        "reducing p95 latency by 35%",
        "improving throughput by 25%",
        "cutting build times by 40%",
        "increasing test coverage by 20%",
        "decreasing error rates by 30%",
        "lowering infrastructure costs by 15%",
    ),
}


def resolve_tone(tone: Tone | str | None) -> Tone:
    """Map any tone input to a known Tone, falling back to professional."""
    if isinstance(tone, Tone):
        return tone
    try:
        return Tone(tone)
    except ValueError:
        return DEFAULT_TONE


def should_inject_impact(
    rng: RandomSource, probability: float = IMPACT_PROBABILITY,
) -> bool:
    """Single probability draw for the impact-injection phase."""
    return rng.random() < probability


def apply_pattern_rules(description: str, tone: Tone) -> str | None:
    """Rewrite with the first matching rule, or None if no rule matches."""
    templates = TEMPLATES[tone]
    for rule in RULES:
        match = rule.pattern.search(description)
        if match is None:
            continue
        template = templates[rule.category]
        return rule.pattern.sub(
            lambda m: template.format(subject=m.group("subject")),
            description,
            count=1,
        )
    return None


def apply_fallback_framing(description: str, tone: Tone) -> str:
    """Capitalize and wrap with tone framing unless a marker word is present."""
    enhanced = description[:1].upper() + description[1:]
    lowered = enhanced.lower()
    if any(marker in lowered for marker in MARKER_WORDS[tone]):
        return enhanced
    return FRAMING[tone].format(text=lowered)


class TextTransformer:
    """Deterministic-given-seed enhancer: pattern rules → fallback framing → impact clause."""

    def __init__(
        self,
        rng: RandomSource | None = None,
        impact_probability: float = IMPACT_PROBABILITY,
    ):
        self.rng = rng if rng is not None else random.Random()  # nosec B311
        self.impact_probability = impact_probability

    def enhance(self, note, tone: Tone | str | None = None) -> str:
        """Enhance a note-like object (anything with a `description`)."""
        return self.enhance_text(note.description, tone)

    def enhance_text(self, description: str, tone: Tone | str | None = None) -> str:
        resolved = resolve_tone(tone)
        enhanced = apply_pattern_rules(description, resolved)
        if enhanced is None:
            enhanced = apply_fallback_framing(description, resolved)
        return self._add_impact(enhanced, resolved)

    def _add_impact(self, text: str, tone: Tone) -> str:
        inject = should_inject_impact(self.rng, self.impact_probability)
        if inject and "%" not in text:
            return f"{text}, {self.rng.choice(IMPACT_PHRASES[tone])}"
        return text
