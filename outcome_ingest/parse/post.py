"""
Post parser.

Combines section extraction, field parsers and the decision list parser into
one :class:`~outcome_ingest.parse.models.ParsedPost` per archive post. A post
without any usable decisions is rejected outright; a missing demographic or
academic field only leaves that field empty.
"""

import html
import re

from typing import Optional

from . import fields
from .decisions import parse_decisions
from .models import Academics, Demographics, ParsedPost
from .sections import extract_field, extract_section, first_section

MAX_EXTRACURRICULARS = 10
MAX_ACTIVITY_LENGTH = 100
MAX_MAJOR_LENGTH = 100

_ASIDE_RE = re.compile(r"\([^)]*\)")
_ACTIVITY_PREFIX_RE = re.compile(r"^\s*(?:\d+[.)]\s*)?[\s*\-•]*")
_ACTIVITY_TITLE_SPLIT_RE = re.compile(r":|\s[-–—]+\s|[–—]")
_TEMPLATE_PROMPT_RE = re.compile(r"^list all\b", re.IGNORECASE)

_FIRST_GEN_RE = re.compile(r"first[\s-]*gen", re.IGNORECASE)
_NOT_FIRST_GEN_RE = re.compile(r"\b(?:not|non|no)[\s-]+first[\s-]*gen", re.IGNORECASE)
_LEGACY_RE = re.compile(r"\blegacy\b", re.IGNORECASE)
_NOT_LEGACY_RE = re.compile(r"\b(?:not\s+(?:a\s+)?|non[\s-]?|no\s+)legacy\b", re.IGNORECASE)


def _parse_demographics(section) -> Demographics:
    """Read demographic fields from the Demographics section text."""
    if not section:
        return Demographics()

    # Template labels such as "Hooks (..., First-Gen, Legacy, etc.)" list
    # every hook, so qualifiers are dropped before looking for flags.
    without_asides = _ASIDE_RE.sub("", section)
    residence = extract_field(section, "Residence")
    school_type = extract_field(section, "Type of School") or extract_field(section, "School Type")

    return Demographics(
        gender=extract_field(section, "Gender"),
        race_ethnicity=extract_field(section, "Race"),
        state_of_residence=fields.parse_state(residence) if residence else fields.parse_state(section),
        high_school_type=fields.parse_school_type(school_type),
        first_generation=fields.parse_flag(without_asides, _FIRST_GEN_RE, _NOT_FIRST_GEN_RE),
        legacy=fields.parse_flag(without_asides, _LEGACY_RE, _NOT_LEGACY_RE),
        locale=fields.parse_locale(without_asides),
    )


def _parse_academics(academics_text, testing_text) -> Academics:
    """Read GPA, test scores and course counts."""
    combined = f"{academics_text}\n{testing_text}"
    gpa = fields.parse_gpa(extract_field(academics_text, "GPA"))
    courses = fields.parse_course_counts(combined)
    scores_text = testing_text or combined

    return Academics(
        gpa_unweighted=gpa["unweighted"],
        gpa_weighted=gpa["weighted"],
        sat_score=fields.parse_sat(scores_text),
        act_score=fields.parse_act(scores_text),
        ap_courses=courses["ap"],
        ib_courses=courses["ib"],
        honors_courses=courses["honors"],
    )


def parse_intended_major(text) -> Optional[str]:
    """Return the first line of the Intended Major section, if short enough."""
    section = extract_section(text, "Intended Major")
    if not section:
        return None
    major = section.splitlines()[0].strip().lstrip("*: ").strip().strip("*").strip()
    if not major or len(major) > MAX_MAJOR_LENGTH:
        return None
    return major


def parse_extracurriculars(text):
    """Return up to ten activity titles from the Extracurriculars section.

    Numbering and bullets are stripped and only the part before the first
    colon or dash is kept, so ``"1. Robotics Club - captain, 10 hrs/wk"``
    becomes ``"Robotics Club"``.

    :param text: Entity-decoded post body.
    :type text: str
    :returns: Activity titles in post order.
    :rtype: list[str]
    """
    section = first_section(text, "Extracurriculars", "Activities")
    if not section:
        return []

    activities = []
    for line in section.splitlines():
        stripped = _ACTIVITY_PREFIX_RE.sub("", line).strip()
        if len(stripped) < 3 or len(stripped) > 200:
            continue
        if _TEMPLATE_PROMPT_RE.match(stripped):
            continue
        title = _ACTIVITY_TITLE_SPLIT_RE.split(stripped)[0].strip().strip("*_").strip()
        if len(title) >= 3:
            activities.append(title[:MAX_ACTIVITY_LENGTH])
        if len(activities) >= MAX_EXTRACURRICULARS:
            break
    return activities


def parse_post(post) -> Optional[ParsedPost]:
    """Parse one archive post into structured outcome data.

    The body is HTML-entity decoded first (the archive escapes Markdown
    ``>`` and ``<``, which would hide spoiler tags). Posts for which no
    decision strategy finds anything return ``None``; they are never
    partially filled.

    :param post: Archive post.
    :type post: outcome_ingest.parse.models.RawPost
    :returns: Parsed post, or ``None`` when it has no usable decisions.
    :rtype: ParsedPost or None
    """
    if not post.body or not post.body.strip():
        return None

    text = html.unescape(post.body)

    decisions = parse_decisions(text)
    if not decisions:
        return None

    academics_text = extract_section(text, "Academics") or ""
    testing_text = first_section(text, "Standardized Testing", "Testing") or ""

    return ParsedPost(
        decisions=decisions,
        admission_cycle=fields.admission_cycle(post.created_utc),
        demographics=_parse_demographics(extract_section(text, "Demographics")),
        academics=_parse_academics(academics_text, testing_text),
        intended_major=parse_intended_major(text),
        extracurriculars=parse_extracurriculars(text),
    )
