"""Enhancement Prompt — instructions sent to a remote language-model enhancer.

Invariants:
    - Prompt is a pure function of (note type, title, description, tone)
    - Unknown tones fall back to professional guidance
"""

from careernotes.core.domain_types import NoteType, Tone
from careernotes.core.text_transformer import resolve_tone

ENHANCER_SYSTEM_PROMPT = (
    "You rewrite short career notes into polished, CV-ready statements. "
    "Reply with the rewritten statement only: one or two sentences, no preamble, "
    "no quotes, no markdown."
)

TYPE_CONTEXT: dict[NoteType, str] = {
    NoteType.ACHIEVEMENT: "professional achievement or recognition",
    NoteType.PROJECT: "project or initiative",
    NoteType.FEEDBACK: "performance feedback or testimonial",
    NoteType.SKILL: "skill development or certification",
}

TONE_GUIDANCE: dict[Tone, str] = {
    Tone.PROFESSIONAL: "Formal and results-oriented, suitable for a CV or performance review",
    Tone.FRIENDLY: "Warm and conversational while still professional",
    Tone.TECHNICAL: "Precise and engineering-focused, naming tools, methods and metrics",
}


def build_enhancement_prompt(note, tone: Tone | str | None) -> str:
    """Build the user prompt for a note-like object (type, title, description)."""
    note_type = NoteType(note.type)
    resolved = resolve_tone(tone)
    return (
        f"Transform this {TYPE_CONTEXT[note_type]} description into a "
        f"professional CV-style statement:\n\n"
        f"Title: {note.title}\n"
        f"Description: {note.description}\n\n"
        f"Tone: {TONE_GUIDANCE[resolved]}\n\n"
        "Requirements:\n"
        "- Use action verbs and quantifiable results where possible\n"
        "- Make it concise and impactful\n"
        "- Focus on professional value and outcomes\n"
        "- Maintain accuracy while enhancing presentation\n"
        "- Use third-person perspective suitable for CV/resume"
    )
