"""Export Generator — CV, LinkedIn and promotion documents.

Tests:
    - CV summary appears only when more than one note type is present
    - Best-available content (enhanced over raw) used by every export type
    - LinkedIn tone defaults, highlight cap, skill connector, hashtags
    - Promotion case with zero notes and fixed section order
    - Unknown export type / LinkedIn tone rejected
"""

import uuid
from datetime import datetime, timezone

import pytest

from careernotes.core.domain_types import EnhancementStatus, NoteId, NoteType
from careernotes.core.errors import InvalidExportToneError, InvalidExportTypeError
from careernotes.core.export_generator import (
    PROMOTION_RECOMMENDATION,
    ExportOptions,
    generate_export,
)
from careernotes.core.note_lifecycle import NoteRecord


def make_note(
    note_type: str, description: str, enhanced: str | None = None, title: str = "Title",
) -> NoteRecord:
    now = datetime(2026, 3, 1, tzinfo=timezone.utc)
    return NoteRecord(
        id=NoteId(uuid.uuid4()),
        type=NoteType(note_type),
        title=title,
        description=description,
        enhanced_description=enhanced,
        is_enhancing=False,
        enhancement_status=(
            EnhancementStatus.ENHANCED if enhanced else EnhancementStatus.FAILED
        ),
        created_at=now,
        updated_at=now,
    )


# ─── CV ──────────────────────────────────────────────────────────

def test_cv_with_two_types_starts_with_summary():
    notes = [
        make_note("project", "raw project", enhanced="Shipped checkout v2"),
        make_note("achievement", "Won hackathon"),
    ]
    content = generate_export(notes, ExportOptions(type="cv"))
    assert content == (
        "Professional Summary:\n"
        "Results-driven professional with demonstrated expertise across "
        "project delivery, performance excellence. Proven track record of 2 "
        "documented accomplishments with quantifiable impact and consistent "
        "recognition for quality delivery.\n\n"
        "Key Achievements:\n"
        "• Won hackathon\n\n"
        "Notable Projects:\n"
        "• Shipped checkout v2"
    )


def test_cv_with_single_type_has_no_summary():
    notes = [make_note("skill", "Python"), make_note("skill", "SQL")]
    content = generate_export(notes, ExportOptions(type="cv"))
    assert content == "Technical Competencies:\n• Python\n• SQL"
    assert "Professional Summary" not in content


def test_cv_summary_lists_only_present_categories():
    notes = [make_note("feedback", "Great mentor"), make_note("skill", "Go")]
    content = generate_export(notes, ExportOptions(type="cv"))
    assert "expertise across technical development. " in content
    assert "Proven track record of 0 documented accomplishments" in content
    assert content.index("Technical Competencies:") < content.index(
        "Recognition & Feedback:",
    )


def test_cv_of_no_notes_is_empty():
    assert generate_export([], ExportOptions(type="cv")) == ""


def test_cv_ignores_tone():
    notes = [make_note("skill", "Python")]
    assert generate_export(notes, ExportOptions(type="cv", tone="bogus")) == (
        generate_export(notes, ExportOptions(type="cv"))
    )


# ─── LinkedIn ────────────────────────────────────────────────────

def test_linkedin_defaults_to_neutral():
    notes = [make_note("project", "raw", enhanced="Launched the mobile app")]
    content = generate_export(notes, ExportOptions(type="linkedin"))
    assert content == (
        "Reflecting on recent professional milestones:\n\n"
        "✓ Launched the mobile app\n\n"
        "Looking forward to applying these insights in future challenges.\n\n"
        "#ProfessionalUpdate #CareerDevelopment #Milestones"
    )


def test_linkedin_highlights_first_three_notes_in_order():
    notes = [make_note("achievement", f"Win {i}") for i in range(5)]
    content = generate_export(notes, ExportOptions(type="linkedin", tone="technical"))
    assert "✓ Win 0\n✓ Win 1\n✓ Win 2\n\n" in content
    assert "Win 3" not in content
    assert content.startswith("Technical update on recent projects and achievements:")
    assert content.endswith("#TechUpdate #Development #Innovation #TechnicalGrowth")


def test_linkedin_skill_connector_names_two_skills():
    notes = [
        make_note("skill", "d1", title="Python"),
        make_note("skill", "d2", title="SQL"),
    ]
    content = generate_export(notes, ExportOptions(type="linkedin", tone="inspiring"))
    assert (
        "This journey taught me that Python and SQL are essential for driving impact.\n\n"
        in content
    )
    assert content.endswith("#Growth #Achievement #ProfessionalDevelopment #Success")


def test_linkedin_skill_connector_mentions_other_skills():
    notes = [
        make_note("skill", "d", title=name) for name in ("Python", "SQL", "Docker")
    ]
    content = generate_export(notes, ExportOptions(type="linkedin"))
    assert (
        "This experience reinforced Python and SQL and other key skills are "
        "essential for driving impact." in content
    )
    assert "Docker" not in content


def test_linkedin_without_skills_has_no_connector():
    notes = [make_note("achievement", "Won award")]
    content = generate_export(notes, ExportOptions(type="linkedin"))
    assert "essential for driving impact" not in content


def test_linkedin_rejects_unknown_tone():
    with pytest.raises(InvalidExportToneError):
        generate_export([], ExportOptions(type="linkedin", tone="sarcastic"))


# ─── Promotion ───────────────────────────────────────────────────

def test_promotion_with_no_notes():
    content = generate_export([], ExportOptions(type="promotion"))
    assert content == (
        "PROMOTION CASE SUMMARY\n"
        + "=" * 50 + "\n\n"
        "EXECUTIVE SUMMARY:\n"
        "This promotion case is based on 0 documented career milestones, "
        "including 0 key achievements and 0 significant project contributions. "
        "The evidence demonstrates consistent high performance, measurable "
        "impact, and readiness for increased responsibilities and leadership "
        "opportunities.\n\n"
        "RECOMMENDATION:\n"
        + PROMOTION_RECOMMENDATION
    )
    for label in ("KEY ACHIEVEMENTS", "PROJECT IMPACT", "PERFORMANCE RECOGNITION",
                  "PROFESSIONAL DEVELOPMENT"):
        assert label not in content


def test_promotion_sections_in_fixed_order_with_numbering():
    notes = [
        make_note("skill", "Learned Rust"),
        make_note("feedback", "raw", enhanced="Praised by director"),
        make_note("project", "Payments rewrite"),
        make_note("achievement", "Employee of the month"),
        make_note("achievement", "Cut costs"),
    ]
    content = generate_export(notes, ExportOptions(type="promotion"))
    positions = [
        content.index(label)
        for label in ("KEY ACHIEVEMENTS:", "PROJECT IMPACT:",
                      "PERFORMANCE RECOGNITION:", "PROFESSIONAL DEVELOPMENT:",
                      "RECOMMENDATION:")
    ]
    assert positions == sorted(positions)
    assert "KEY ACHIEVEMENTS:\n1. Employee of the month\n2. Cut costs\n\n" in content
    assert "PERFORMANCE RECOGNITION:\n1. Praised by director\n\n" in content
    assert "based on 5 documented career milestones, including 2 key achievements and 1 significant" in content


def test_promotion_omits_empty_categories():
    content = generate_export(
        [make_note("project", "Search revamp")], ExportOptions(type="promotion"),
    )
    assert "PROJECT IMPACT:\n1. Search revamp\n\n" in content
    assert "KEY ACHIEVEMENTS" not in content
    assert "PROFESSIONAL DEVELOPMENT" not in content


# ─── Dispatch ────────────────────────────────────────────────────

def test_unknown_export_type_rejected():
    with pytest.raises(InvalidExportTypeError) as exc_info:
        generate_export([make_note("skill", "Go")], ExportOptions(type="resume"))
    assert exc_info.value.code == "INVALID_EXPORT_TYPE"
    assert exc_info.value.http_status == 400


@pytest.mark.parametrize("export_type", ["cv", "linkedin", "promotion"])
def test_identical_inputs_give_identical_documents(export_type):
    notes = [
        make_note("achievement", "A", enhanced="Enhanced A"),
        make_note("skill", "B", title="Go"),
    ]
    options = ExportOptions(type=export_type)
    assert generate_export(notes, options) == generate_export(list(notes), options)
