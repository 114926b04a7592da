"""
tests.test_decisions
====================

Tests for school-name cleanup, noise filtering, outcome words and the four
decision-list strategies, including the rule that the first strategy to find
anything wins.
"""

import pytest

from outcome_ingest.parse import decisions as dec
from outcome_ingest.parse.models import (
    ACCEPTED,
    DEFERRED,
    EARLY_ACTION,
    EARLY_DECISION,
    REGULAR,
    REJECTED,
    ROLLING,
    WAITLISTED,
    Decision,
)


def _triples(found):
    return [(d.school_name, d.outcome, d.application_round) for d in found]


# ============================================================
# NAME CLEANUP
# ============================================================

@pytest.mark.parsing
@pytest.mark.parametrize("raw, name, round_", [
    ("Cornell University <-- committed!", "Cornell University", None),
    ("* MIT (EA)", "MIT", EARLY_ACTION),
    ("1. UChicago [ED2] w/ $40k", "UChicago", EARLY_DECISION),
    ("* **Rice University** (EA) - full ride!", "Rice University", EARLY_ACTION),
    ("Harvard RD", "Harvard", REGULAR),
    (">!Duke University!<", "Duke University", None),
    ("Texas A&amp;amp;M", "Texas A&M", None),
    ("Georgia Tech (OOS", "Georgia Tech", None),
    ("Texas A&M - auto admit", "Texas A&M", None),
    ("UT Austin auto-admit", "UT Austin", None),
    ("Rolling Hills College", "Rolling Hills College", None),
    ("Regis University - Regular Decision", "Regis University", REGULAR),
    ("Penn State (rolling)", "Penn State", ROLLING),
    ("Duke University Early Decision", "Duke University", EARLY_DECISION),
])
def test_clean_school_name(raw, name, round_):
    """Bullets, rounds, asides, emphasis, suffixes and entities are removed."""
    assert dec.clean_school_name(raw) == (name, round_)


@pytest.mark.parsing
@pytest.mark.parametrize("raw", [
    "Cornell University <-- committed!",
    "1. UChicago [ED2] w/ $40k",
    "* **Rice University** (EA) - full ride!",
    "Northeastern (deferred EA -> accepted RD)",
    "Boston College &amp;gt; withdrew",
])
def test_cleanup_is_idempotent(raw):
    """Cleaning an already-clean name returns it unchanged."""
    once, _ = dec.clean_school_name(raw)
    twice, _ = dec.clean_school_name(once)
    assert once == twice


@pytest.mark.parsing
@pytest.mark.parametrize("name, noisy", [
    ("Harvard University", False),
    ("UCLA", False),
    ("ab", True),
    ("x" * 101, True),
    ("one two three four five six seven eight nine", True),
    ("Pending", True),
    ("tldr got into my safety", True),
    ("So happy with how it went!", True),
])
def test_is_noise(name, noisy):
    """Length, word count, stoplist openers and sentences are rejected."""
    assert dec.is_noise(name) is noisy


@pytest.mark.parsing
@pytest.mark.parametrize("text, outcome", [
    ("Accepted!", ACCEPTED),
    ("Rejected", REJECTED),
    ("denied :(", REJECTED),
    ("WL", WAITLISTED),
    ("Deferred -> Accepted", ACCEPTED),
    ("deferred", DEFERRED),
    ("pending", None),
    ("Accepted! (was deferred EA)", ACCEPTED),
    ("(rejected)", REJECTED),
])
def test_outcome_from_text(text, outcome):
    """The last outcome word outside any aside is the result."""
    assert dec.outcome_from_text(text) == outcome


# ============================================================
# STRATEGIES
# ============================================================

@pytest.mark.parsing
def test_spoiler_line_without_heading():
    """``MIT: »Accepted!«`` alone yields one accepted decision with no round."""
    assert dec.parse_decisions("MIT: »Accepted!«") == [
        Decision(school_name="MIT", outcome=ACCEPTED, application_round=None,
                 raw_text="MIT"),
    ]


@pytest.mark.parsing
def test_spoiler_tags_anywhere_in_post():
    """Reddit spoiler tags are found outside any section."""
    text = "Some intro text.\n\n- Yale: >!Rejected!<\n- Duke (ED) - >!Deferred!<\n"
    assert _triples(dec.spoiler_tag_decisions(text)) == [
        ("Yale", REJECTED, None),
        ("Duke", DEFERRED, EARLY_DECISION),
    ]


@pytest.mark.parsing
def test_spoiler_outcome_ignores_aside():
    """An earlier round mentioned in an aside does not replace the outcome."""
    assert _triples(dec.parse_decisions("Yale: >!Accepted! (was deferred EA)!<")) == [
        ("Yale", ACCEPTED, None),
    ]


@pytest.mark.parsing
def test_labeled_section_with_subheadings():
    """The bold Decisions section is split by its sub-headings."""
    text = (
        "**Decisions**\n\n"
        "*Acceptances:*\n* MIT (EA)\n* UCLA\n\n"
        "**Waitlists:**\n* Stanford (REA)\n\n"
        "*Rejections:*\n* Harvard (RD)\n\n"
        "**Additional Information:**\nThanks for reading\n"
    )
    assert _triples(dec.labeled_section_decisions(text)) == [
        ("MIT", ACCEPTED, EARLY_ACTION),
        ("UCLA", ACCEPTED, None),
        ("Stanford", WAITLISTED, EARLY_ACTION),
        ("Harvard", REJECTED, REGULAR),
    ]


@pytest.mark.parsing
def test_inline_subheading_content():
    """Schools after the sub-heading colon are read as well."""
    region = "Accepted: Rice University\nRejected: Duke University, Yale"
    assert _triples(dec.decisions_from_region(region)) == [
        ("Rice University", ACCEPTED, None),
        ("Duke University, Yale", REJECTED, None),
    ]


@pytest.mark.parsing
def test_loose_subsections_without_decisions_heading():
    """Bare Acceptances / Rejections headings start the region."""
    text = (
        "Stats: 1500 SAT, 3.9 UW\n\n"
        "Acceptances:\nRice University\nTulane (EA)\n\n"
        "Rejections:\nDuke University\n"
    )
    assert dec.labeled_section_decisions(text) == []
    assert _triples(dec.loose_subsection_decisions(text)) == [
        ("Rice University", ACCEPTED, None),
        ("Tulane", ACCEPTED, EARLY_ACTION),
        ("Duke University", REJECTED, None),
    ]


@pytest.mark.parsing
def test_hash_header_region_ends_at_same_level():
    """A ``## Results`` region stops at the next level-2 heading."""
    text = (
        "# My cycle\n\n"
        "## Results\n"
        "Accepted:\nBoston University\n"
        "### Details\n"
        "Rejected:\nBoston College\n\n"
        "## Reflection\n"
        "Accepted:\nNot A School Line Here.\n"
    )
    assert dec.loose_subsection_decisions(text) == []
    assert _triples(dec.hash_header_decisions(text)) == [
        ("Boston University", ACCEPTED, None),
        ("Boston College", REJECTED, None),
    ]


@pytest.mark.parsing
def test_first_strategy_wins_without_merging():
    """Spoiler-tag results are not merged with a Decisions section."""
    text = (
        "Rice: >!Accepted!<\n\n"
        "**Decisions**\n*Rejections:*\n* Duke University\n"
    )
    assert _triples(dec.parse_decisions(text)) == [("Rice", ACCEPTED, None)]


@pytest.mark.parsing
def test_noise_lines_are_dropped():
    """Commentary lines inside a region are not schools."""
    region = "Acceptances:\nRice University\nPending\nso happy about this one!\n"
    assert _triples(dec.decisions_from_region(region)) == [
        ("Rice University", ACCEPTED, None),
    ]


@pytest.mark.parsing
def test_no_markers_no_decisions():
    """A post without any decision markers yields nothing."""
    assert dec.parse_decisions("Just chance me please, 1500 SAT") == []


@pytest.mark.parsing
def test_decision_rejects_unknown_values():
    """Outcomes and rounds are limited to the store's enum values."""
    with pytest.raises(ValueError):
        Decision(school_name="Rice", outcome="maybe")
    with pytest.raises(ValueError):
        Decision(school_name="Rice", outcome=ACCEPTED, application_round="ED")
