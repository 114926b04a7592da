"""
tests.test_post_parser
======================

End-to-end parsing of whole posts written from the community template, plus
the rule that a post without decisions is rejected outright.
"""

from datetime import datetime, timezone

import pytest

from outcome_ingest.parse import RawPost, parse_post
from outcome_ingest.parse.models import ACCEPTED, EARLY_ACTION, REJECTED, WAITLISTED
from outcome_ingest.parse.post import parse_extracurriculars, parse_intended_major

TEMPLATE_POST = """**Demographics**

* Gender: Female
* Race/Ethnicity: Asian
* Residence: California
* Income Bracket: 100k-150k
* Type of School: Public, suburban
* Hooks (Recruited Athlete, URM, First-Gen, Geographic, Legacy, etc.): First-Gen

**Intended Major(s)**: Computer Science

**Academics**

* GPA (UW/W): 3.95/4.4
* Rank (or percentile): top 5%
* # of Honors/AP/IB/Dual Enrollment/etc.: 8 AP, 4 Honors

**Standardized Testing**

* SAT I: 1540 (770 RW, 770 M)
* ACT: N/A

**Extracurriculars/Activities**

1. Robotics Club - captain, 10 hrs/wk
2. Varsity Tennis: 4 years
3. List all extracurriculars here

**Decisions**

*Acceptances:*
* MIT (EA)
* UCLA

*Waitlists:*
* Stanford (REA)

*Rejections:*
* Harvard
"""


def _post(body, month=3, post_id="abc123"):
    created = int(datetime(2024, month, 15, tzinfo=timezone.utc).timestamp())
    return RawPost(id=post_id, title="Results", body=body, created_utc=created,
                   permalink=f"/r/collegeresults/comments/{post_id}/results/")


# ============================================================
# WHOLE POSTS
# ============================================================

@pytest.mark.parsing
def test_template_post_decisions():
    """Decisions come from the bold Decisions section in order."""
    parsed = parse_post(_post(TEMPLATE_POST))
    assert [(d.school_name, d.outcome, d.application_round) for d in parsed.decisions] == [
        ("MIT", ACCEPTED, EARLY_ACTION),
        ("UCLA", ACCEPTED, None),
        ("Stanford", WAITLISTED, EARLY_ACTION),
        ("Harvard", REJECTED, None),
    ]


@pytest.mark.parsing
def test_template_post_demographics():
    """Demographic fields are read from their labels; template hints are ignored."""
    demo = parse_post(_post(TEMPLATE_POST)).demographics
    assert demo.gender == "Female"
    assert demo.race_ethnicity == "Asian"
    assert demo.state_of_residence == "CA"
    assert demo.high_school_type == "public"
    assert demo.first_generation is True
    assert demo.legacy is None
    assert demo.locale == "suburban"


@pytest.mark.parsing
def test_template_post_academics():
    """GPA pair, SAT and course counts are read; a placeholder ACT is None."""
    academics = parse_post(_post(TEMPLATE_POST)).academics
    assert academics.gpa_unweighted == 3.95
    assert academics.gpa_weighted == 4.4
    assert academics.sat_score == 1540
    assert academics.act_score is None
    assert academics.ap_courses == 8
    assert academics.honors_courses == 4
    assert academics.ib_courses is None


@pytest.mark.parsing
def test_template_post_major_and_activities():
    """Major is the first line; activities keep the title before the dash."""
    parsed = parse_post(_post(TEMPLATE_POST))
    assert parsed.intended_major == "Computer Science"
    assert parsed.extracurriculars == ["Robotics Club", "Varsity Tennis"]


@pytest.mark.parsing
def test_admission_cycle_from_post_date():
    """March and September posts fall in different cycles."""
    assert parse_post(_post(TEMPLATE_POST, month=3)).admission_cycle == "2023-2024"
    assert parse_post(_post(TEMPLATE_POST, month=9)).admission_cycle == "2024-2025"


@pytest.mark.parsing
def test_escaped_spoiler_tags_are_decoded():
    """Entity-escaped spoiler tags from the archive are still found."""
    parsed = parse_post(_post("Yale: &gt;!Rejected!&lt;\nRice: &gt;!Accepted!&lt;"))
    assert [(d.school_name, d.outcome) for d in parsed.decisions] == [
        ("Yale", REJECTED),
        ("Rice", ACCEPTED),
    ]
    assert parsed.demographics.gender is None
    assert parsed.academics.sat_score is None
    assert parsed.extracurriculars == []


@pytest.mark.parsing
@pytest.mark.parametrize("body", [
    "",
    "   ",
    "**Demographics**\n* Gender: Male\n\n**Academics**\n* GPA: 3.9",
    "Chance me? 1550 SAT, 4.0 UW, want CS at MIT.",
])
def test_posts_without_decisions_are_rejected(body):
    """No decisions region means no ParsedPost at all."""
    assert parse_post(_post(body)) is None


# ============================================================
# HELPERS
# ============================================================

@pytest.mark.parsing
def test_intended_major_too_long_is_dropped():
    """Majors longer than 100 characters are not kept."""
    text = "**Intended Major**: " + "a" * 101
    assert parse_intended_major(text) is None


@pytest.mark.parsing
def test_extracurriculars_capped_at_ten():
    """At most ten activities are kept and titles are truncated."""
    lines = "\n".join(f"{i}. Activity number {i}" for i in range(1, 15))
    text = f"**Extracurriculars**\n{lines}\n\n**Awards**\n1. Medal"
    activities = parse_extracurriculars(text)
    assert len(activities) == 10
    assert activities[0] == "Activity number 1"

    long_title = "**Extracurriculars**\n1. " + "b" * 150
    assert parse_extracurriculars(long_title) == ["b" * 100]
