"""
tests.test_sections
===================

Tests for bold-heading section extraction and ``label: value`` field reads.
"""

import re

import pytest

from outcome_ingest.parse.sections import extract_field, extract_section, first_section

POST = """**Demographics**

* Gender: Male
* Residence: Ohio

**Intended Major(s)**: Economics

**Academics**
* GPA (UW/W): 3.9/4.4
* Rank: N/A
"""


@pytest.mark.parsing
def test_section_runs_to_next_bold_heading():
    """A section stops at the next bold, capitalized heading."""
    section = extract_section(POST, "Demographics")
    assert section == "* Gender: Male\n* Residence: Ohio"


@pytest.mark.parsing
def test_heading_with_qualifier_matches_label():
    """Trailing qualifier text after the label is tolerated."""
    assert extract_section(POST, "Intended Major") == "Economics"


@pytest.mark.parsing
def test_last_section_runs_to_end():
    """The final section runs to the end of the document."""
    assert extract_section(POST, "academics").startswith("* GPA (UW/W)")


@pytest.mark.parsing
def test_missing_heading_returns_none():
    """The extractor does not guess when a heading is absent."""
    assert extract_section(POST, "Decisions") is None
    assert extract_section("", "Demographics") is None


@pytest.mark.parsing
def test_nested_headings_do_not_end_section():
    """Headings matching ``nested`` stay inside the section."""
    text = "**Decisions**\n**Acceptances**\nRice\n**Rejections**\nDuke\n**Final Thoughts**\nbye"
    nested = re.compile(r"acceptances|rejections", re.IGNORECASE)
    assert extract_section(text, "Decisions", nested=nested) == (
        "**Acceptances**\nRice\n**Rejections**\nDuke"
    )
    assert extract_section(text, "Decisions") == ""


@pytest.mark.parsing
def test_first_section_uses_first_present_label():
    """Alternative labels are tried in order."""
    text = "**Activities**\n1. Chess"
    assert first_section(text, "Extracurriculars", "Activities") == "1. Chess"
    assert first_section(text, "Awards") is None


@pytest.mark.parsing
def test_extract_field_ignores_qualifier():
    """Text between label and colon is skipped."""
    section = extract_section(POST, "Academics")
    assert extract_field(section, "GPA") == "3.9/4.4"


@pytest.mark.parsing
def test_extract_field_placeholder_is_none():
    """Placeholder values read as missing."""
    section = extract_section(POST, "Academics")
    assert extract_field(section, "Rank") is None
    assert extract_field(section, "Awards") is None


@pytest.mark.parsing
def test_extract_field_bold_label():
    """Bold labels such as ``**Gender:** Female`` are read too."""
    assert extract_field("**Gender:** Female", "Gender") == "Female"
