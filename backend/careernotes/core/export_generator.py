"""Export Generator — composes career notes into CV, LinkedIn and promotion documents.

Invariants:
    - Pure function of (notes, options): no IO, no clock, no randomness
    - Every builder uses best-available content (enhanced_description over description)
    - Unknown export type raises InvalidExportTypeError before any text is built
    - LinkedIn tone defaults to neutral; tone is ignored for cv and promotion

Design Decisions:
    - One builder function per export type; generate_export only validates and dispatches
    - CV sections in fixed order (achievement, project, skill, feedback), independent of
      input order, so identical note sets give identical documents
"""

from dataclasses import dataclass
from typing import Protocol, Sequence

from careernotes.core.domain_types import ExportType, LinkedInTone, NoteType
from careernotes.core.errors import InvalidExportTypeError, InvalidExportToneError


class ExportableNote(Protocol):
    type: str
    title: str
    description: str
    enhanced_description: str | None


@dataclass(frozen=True)
class ExportOptions:
    type: str
    tone: str | None = None


def best_content(note: ExportableNote) -> str:
    return note.enhanced_description or note.description


def _of_type(notes: Sequence[ExportableNote], note_type: NoteType) -> list:
    return [n for n in notes if NoteType(n.type) == note_type]


# ─── CV ──────────────────────────────────────────────────────────

CV_SECTIONS: dict[NoteType, str] = {
    NoteType.ACHIEVEMENT: "Key Achievements",
    NoteType.PROJECT: "Notable Projects",
    NoteType.SKILL: "Technical Competencies",
    NoteType.FEEDBACK: "Recognition & Feedback",
}


def professional_summary(notes: Sequence[ExportableNote]) -> str:
    """Summary paragraph from achievement/project/skill counts."""
    achievements = len(_of_type(notes, NoteType.ACHIEVEMENT))
    projects = len(_of_type(notes, NoteType.PROJECT))
    skills = len(_of_type(notes, NoteType.SKILL))

    areas = []
    if projects > 0:
        areas.append("project delivery")
    if achievements > 0:
        areas.append("performance excellence")
    if skills > 0:
        areas.append("technical development")

    return (
        "Results-driven professional with demonstrated expertise across "
        f"{', '.join(areas)}. "
        f"Proven track record of {achievements + projects} documented accomplishments "
        "with quantifiable impact and consistent recognition for quality delivery."
    )


def generate_cv_section(notes: Sequence[ExportableNote]) -> str:
    groups = {
        note_type: _of_type(notes, note_type)
        for note_type in CV_SECTIONS
    }
    groups = {k: v for k, v in groups.items() if v}

    content = ""
    for note_type, group in groups.items():
        content += f"{CV_SECTIONS[note_type]}:\n"
        for note in group:
            content += f"• {best_content(note)}\n"
        content += "\n"

    if len(groups) > 1:
        content = (
            f"Professional Summary:\n{professional_summary(notes)}\n\n{content}"
        )
    return content.strip()


# ─── LinkedIn ────────────────────────────────────────────────────

LINKEDIN_STYLES: dict[LinkedInTone, dict[str, str]] = {
    LinkedInTone.NEUTRAL: {
        "opener": "Reflecting on recent professional milestones:",
        "connector": "This experience reinforced",
        "closer": "Looking forward to applying these insights in future challenges.",
        "hashtags": "#ProfessionalUpdate #CareerDevelopment #Milestones",
    },
    LinkedInTone.INSPIRING: {
        "opener": "🚀 Excited to share some recent wins and learnings:",
        "connector": "This journey taught me that",
        "closer": "Here's to continuous growth and pushing boundaries! 💪",
        "hashtags": "#Growth #Achievement #ProfessionalDevelopment #Success",
    },
    LinkedInTone.TECHNICAL: {
        "opener": "Technical update on recent projects and achievements:",
        "connector": "Key technical insights gained:",
        "closer": "Always learning and evolving in the tech space.",
        "hashtags": "#TechUpdate #Development #Innovation #TechnicalGrowth",
    },
}

MAX_HIGHLIGHTS = 3
MAX_NAMED_SKILLS = 2


def _resolve_linkedin_tone(tone: str | None) -> LinkedInTone:
    if tone is None:
        return LinkedInTone.NEUTRAL
    try:
        return LinkedInTone(tone)
    except ValueError:
        raise InvalidExportToneError(tone)


def generate_linkedin_post(
    notes: Sequence[ExportableNote], tone: str | None = None,
) -> str:
    style = LINKEDIN_STYLES[_resolve_linkedin_tone(tone)]

    post = f"{style['opener']}\n\n"
    highlights = "\n".join(
        f"✓ {best_content(note)}" for note in notes[:MAX_HIGHLIGHTS]
    )
    post += f"{highlights}\n\n"

    skills = [n.title for n in _of_type(notes, NoteType.SKILL)]
    if skills:
        named = " and ".join(skills[:MAX_NAMED_SKILLS])
        if len(skills) > MAX_NAMED_SKILLS:
            named += " and other key skills"
        post += f"{style['connector']} {named} are essential for driving impact.\n\n"

    post += style["closer"]
    post += f"\n\n{style['hashtags']}"
    return post


# ─── Promotion case ──────────────────────────────────────────────

PROMOTION_SECTIONS: tuple[tuple[NoteType, str], ...] = (
    (NoteType.ACHIEVEMENT, "KEY ACHIEVEMENTS"),
    (NoteType.PROJECT, "PROJECT IMPACT"),
    (NoteType.FEEDBACK, "PERFORMANCE RECOGNITION"),
    (NoteType.SKILL, "PROFESSIONAL DEVELOPMENT"),
)

PROMOTION_RECOMMENDATION = (
    "Based on the documented achievements, project impact, and consistent "
    "performance recognition, I recommend advancement to the next level. "
    "The demonstrated capabilities align with senior-level responsibilities and "
    "show readiness for increased scope and leadership opportunities."
)


def executive_summary(notes: Sequence[ExportableNote]) -> str:
    achievements = len(_of_type(notes, NoteType.ACHIEVEMENT))
    projects = len(_of_type(notes, NoteType.PROJECT))
    return (
        f"This promotion case is based on {len(notes)} documented career "
        f"milestones, including {achievements} key achievements and {projects} "
        "significant project contributions. The evidence demonstrates consistent "
        "high performance, measurable impact, and readiness for increased "
        "responsibilities and leadership opportunities."
    )


def generate_promotion_case(notes: Sequence[ExportableNote]) -> str:
    case = "PROMOTION CASE SUMMARY\n"
    case += "=" * 50 + "\n\n"

    case += "EXECUTIVE SUMMARY:\n"
    case += executive_summary(notes) + "\n\n"

    for note_type, label in PROMOTION_SECTIONS:
        section = _of_type(notes, note_type)
        if not section:
            continue
        case += f"{label}:\n"
        for index, note in enumerate(section, start=1):
            case += f"{index}. {best_content(note)}\n"
        case += "\n"

    case += "RECOMMENDATION:\n"
    case += PROMOTION_RECOMMENDATION
    return case


# ─── Dispatch ────────────────────────────────────────────────────

def generate_export(
    notes: Sequence[ExportableNote], options: ExportOptions,
) -> str:
    """Build the export document. Raises InvalidExportTypeError / InvalidExportToneError."""
    try:
        export_type = ExportType(options.type)
    except ValueError:
        raise InvalidExportTypeError(str(options.type))

    if export_type == ExportType.CV:
        return generate_cv_section(notes)
    if export_type == ExportType.LINKEDIN:
        return generate_linkedin_post(notes, options.tone)
    return generate_promotion_case(notes)
