"""
Section extraction for template-formatted posts.

Posts written from the community template separate their parts with bold
Markdown headings such as ``**Demographics**`` or ``**Intended Major(s)**:``.
This module finds those headings and slices the text between them. It does
not guess: when a heading is missing the caller decides what to fall back to.
"""

import re

from typing import Optional

# A bold heading opening a line with a capital letter ends a section
_BOLD_HEADING_RE = re.compile(r"^[ \t#>]*\*\*\s*([A-Z][^*\n]*)\*\*", re.MULTILINE)

# Field lines look like "* GPA (UW/W): 3.95/4.3" or "**Gender:** Male"
_FIELD_TEMPLATE = (
    r"^[ \t]*(?:[*\-•+][ \t]+)?(?:\*\*|__)?[ \t]*{label}\b[^:\n]*:"
    r"[ \t]*(?:\*\*|__)?[ \t]*(?P<value>[^\n]*)$"
)

_NULL_FIELD_VALUES = {"", "n/a", "na", "-", "--", "none", "x"}


def _heading_pattern(label):
    return re.compile(
        r"\*\*\s*" + re.escape(label) + r"[^*\n]*\*\*[ \t]*:?",
        re.IGNORECASE,
    )


def extract_section(text, label, nested=None) -> Optional[str]:
    """Return the body of the section headed by ``**<label>...**``.

    The heading may carry trailing qualifier text, e.g. ``**Intended
    Major(s)**`` matches the label ``"Intended Major"``. The section runs
    until the next bold, capitalized heading or the end of the document.

    :param text: Full post body.
    :type text: str
    :param label: Section label to look for (matched case-insensitively).
    :type label: str
    :param nested: Optional compiled pattern; bold headings whose text
        matches it belong to this section and do not end it (used for the
        Acceptances / Rejections sub-headings inside Decisions).
    :type nested: re.Pattern or None
    :returns: Stripped section text, or ``None`` when the heading is absent.
    :rtype: str or None
    """
    if not text:
        return None

    heading = _heading_pattern(label).search(text)
    if heading is None:
        return None

    start = heading.end()
    end = len(text)
    for candidate in _BOLD_HEADING_RE.finditer(text, start):
        if nested is not None and nested.match(candidate.group(1).strip()):
            continue
        end = candidate.start()
        break

    return text[start:end].strip()


def first_section(text, *labels) -> Optional[str]:
    """Return the first of several alternative sections that is present."""
    for label in labels:
        section = extract_section(text, label)
        if section is not None:
            return section
    return None


def extract_field(section_text, label) -> Optional[str]:
    """Return the value of a ``<label>: <value>`` line inside a section.

    Qualifiers between the label and the colon are ignored, so the label
    ``"GPA"`` reads ``"* GPA (UW/W): 3.9/4.4"`` as ``"3.9/4.4"``.

    :param section_text: Text of one section.
    :type section_text: str or None
    :param label: Field label.
    :type label: str
    :returns: Field value without surrounding emphasis, or ``None`` when the
        field is missing or holds a placeholder.
    :rtype: str or None
    """
    if not section_text:
        return None

    pattern = re.compile(
        _FIELD_TEMPLATE.format(label=re.escape(label)),
        re.IGNORECASE | re.MULTILINE,
    )
    match = pattern.search(section_text)
    if match is None:
        return None

    value = match.group("value").strip().strip("*_").strip()
    if value.lower() in _NULL_FIELD_VALUES:
        return None
    return value
