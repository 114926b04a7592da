"""
Decision list parsing.

Authors list their results in one of several styles. Each style has its own
extraction strategy; the strategies are tried in a fixed order and the first
one that finds anything wins. Results are never merged across strategies, so
a school mentioned in two styles is only counted once.

Every candidate line goes through :func:`clean_school_name` and is dropped
when :func:`is_noise` says it is not a school.
"""

# Import html for decoding entities left in Markdown bodies
import html

# Import regular expressions for pattern matching
import re

from .models import (
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
from .sections import extract_section

# ============================================================
# SCHOOL NAME CLEANUP
# ============================================================

_BULLET_RE = re.compile(r"^\s*(?:(?:[*\-•+]|>(?!!)|\d{1,2}[.)])\s*)+")
_SPOILER_MARKUP_RE = re.compile(r">!|!<|[»«]")

# (round, abbreviation, words) in priority order. Abbreviations are matched
# case-sensitively anywhere; the spelled-out words only count when set off
# from the name, so "Rolling Hills College" keeps its name.
_ROUND_PATTERNS = (
    (EARLY_DECISION,
     re.compile(r"\bED\s?(?:II|I|1|2)?\b"),
     re.compile(r"\b(?i:early\s+decision)(?:\s+(?:II|I|1|2))?\b")),
    (EARLY_ACTION,
     re.compile(r"\b(?:REA|SCEA|EA\s?(?:II|I|1|2)?)\b"),
     re.compile(r"\b(?i:(?:restrictive\s+|single[\s-]choice\s+)?early\s+action)\b")),
    (REGULAR,
     re.compile(r"\bRD\b"),
     re.compile(r"\b(?i:regular\s+decision|regular)\b")),
    (ROLLING,
     None,
     re.compile(r"\b(?i:rolling)\b")),
)

# Characters that set a round word off from the school name
_ROUND_OPENERS = "([{,:;|/-–—"
_ROUND_CLOSERS = ")]},:;|/-–—"

_ASIDE_RE = re.compile(r"\([^()]*\)|\[[^\[\]]*\]|\{[^{}]*\}")
_UNCLOSED_ASIDE_RE = re.compile(r"[(\[{][^)\]}]*$")
_EMPHASIS_RE = re.compile(r"[*_~`#]")

# Trailing commentary that restates or annotates the outcome
_SUFFIX_PATTERNS = (
    re.compile(r"\s*(?:<-+|<=+|←|-+>|=+>|→).*$"),
    re.compile(r"\s+(?:w/|with\s).*$", re.IGNORECASE),
    re.compile(r"\s*[-–—:,;|]*\s*\$\s?\d.*$"),
    re.compile(
        r"\s*[-–—:,;|]*\s*\b(?:withdr[ae]wn?|committed|commit|attending|"
        r"auto[\s-]?admit(?:ted)?|accepted|admitted|rejected|denied|waitlisted|wait-?listed|deferred|"
        r"likely\s+letter|full\s+ride|scholarship)\b.*$",
        re.IGNORECASE,
    ),
)

_ZERO_WIDTH_RE = re.compile("[\u200b\u200c\u200d\ufeff]")
_WHITESPACE_RE = re.compile(r"\s+")
_TRIM_CHARS = " \t\r\n,;:-–—|/\\+=~\"'<>()[]{}"

_MAX_CLEANUP_PASSES = 5

# Lines opening with these are commentary, not schools
_STOPLIST_RE = re.compile(
    r"^(?:list|none|n/a|pending|waiting|still|final\s+thoughts|additional|"
    r"overall|comments?|tl;?dr|thanks?|thank\s+you|okay|ok|most|after|"
    r"please|edit|update|note|i|i'm|im|my)\b",
    re.IGNORECASE,
)

MIN_NAME_LENGTH = 3
MAX_NAME_LENGTH = 100
MAX_NAME_TOKENS = 8


def _decode_entities(text):
    """Decode HTML entities, including double-escaped ones, and drop zero-width characters."""
    decoded = html.unescape(html.unescape(text))
    return _ZERO_WIDTH_RE.sub("", decoded)


def _strip_suffixes(text):
    for pattern in _SUFFIX_PATTERNS:
        text = pattern.sub("", text)
    return text


def _trim(text):
    return _WHITESPACE_RE.sub(" ", text).strip(_TRIM_CHARS)


def _set_off(name, match):
    before = name[:match.start()].rstrip()
    after = name[match.end():].lstrip()
    return (
        not after
        or after[0] in _ROUND_CLOSERS
        or (bool(before) and before[-1] in _ROUND_OPENERS)
    )


def _strip_rounds(name):
    """Remove round indicators, returning the name and the first round kind found."""
    application_round = None
    spans = []
    for round_value, abbreviation, words in _ROUND_PATTERNS:
        found = list(abbreviation.finditer(name)) if abbreviation else []
        found += [m for m in words.finditer(name) if _set_off(name, m)]
        if found and application_round is None:
            application_round = round_value
        spans.extend(m.span() for m in found)

    cut_from = len(name)
    for start, end in sorted(spans, reverse=True):
        if end > cut_from:
            continue
        name = name[:start] + " " + name[end:]
        cut_from = start
    return name, application_round


def _cleanup_pass(text):
    """Run the cleanup steps once, returning ``(name, round)``."""
    name = _decode_entities(text)
    name = _BULLET_RE.sub("", name)
    name = _SPOILER_MARKUP_RE.sub(" ", name)

    name, application_round = _strip_rounds(name)

    while _ASIDE_RE.search(name):
        name = _ASIDE_RE.sub(" ", name)
    name = _UNCLOSED_ASIDE_RE.sub(" ", name)
    name = _EMPHASIS_RE.sub("", name)

    name = _decode_entities(name)
    name = _strip_suffixes(name)
    name = _decode_entities(name)
    return _trim(name), application_round


def clean_school_name(raw):
    """Turn one decision line into a bare school name and its round.

    Steps, in order: leading bullets and numbering, spoiler markup, round
    indicator (ED/EA/RD/Rolling; the first kind found sets the round and all
    round tokens are removed), parenthetical and bracketed asides, Markdown
    emphasis, trailing commentary such as ``"<-- committed!"`` or
    ``"w/ $40k scholarship"``, HTML entities (decoded before and after the
    suffix step), and finally surrounding punctuation.

    The steps are repeated until the name stops changing, so cleaning an
    already-clean name returns it unchanged.

    :param raw: Raw line text.
    :type raw: str
    :returns: Tuple of ``(name, application_round)``; the round is ``None``
        when no indicator was found.
    :rtype: tuple[str, str or None]
    """
    name = raw or ""
    application_round = None
    for _ in range(_MAX_CLEANUP_PASSES):
        cleaned, found_round = _cleanup_pass(name)
        if application_round is None:
            application_round = found_round
        if cleaned == name:
            break
        name = cleaned
    return name, application_round


def is_noise(name):
    """Return ``True`` when a cleaned name is clearly not a school.

    Rejects names shorter than 3 or longer than 100 characters, names of
    more than 8 words, lines opening with commentary words ("list", "none",
    "pending", "tldr", ...) and sentences ending in ``.``, ``!`` or ``?``.
    """
    if len(name) < MIN_NAME_LENGTH or len(name) > MAX_NAME_LENGTH:
        return True
    if len(name.split()) > MAX_NAME_TOKENS:
        return True
    if _STOPLIST_RE.match(name):
        return True
    return name.endswith((".", "!", "?"))


def _decision_from_line(line, outcome):
    """Clean one line into a ``Decision``, or ``None`` if it is noise."""
    name, application_round = clean_school_name(line)
    if is_noise(name):
        return None
    return Decision(
        school_name=name,
        outcome=outcome,
        application_round=application_round,
        raw_text=line.strip(),
    )


# ============================================================
# OUTCOME WORDS AND SUB-HEADINGS
# ============================================================

_OUTCOME_WORD_RE = re.compile(
    r"(?P<accepted>accept|admit|got\s+in|likely\s+letter)"
    r"|(?P<rejected>reject|den(?:ied|ials?|y)|\brej\b)"
    r"|(?P<waitlisted>wait[\s-]?list|\bwl\b)"
    r"|(?P<deferred>defer)",
    re.IGNORECASE,
)

_OUTCOME_BY_GROUP = {
    "accepted": ACCEPTED,
    "rejected": REJECTED,
    "waitlisted": WAITLISTED,
    "deferred": DEFERRED,
}


def outcome_from_text(text):
    """Map free text such as ``"Accepted!"`` to an outcome.

    When several outcome words appear (``"Deferred -> Accepted"``) the last
    one is taken as the final result. Bracketed asides such as
    ``"(was deferred EA)"`` are only read when nothing outside them names
    an outcome.

    :returns: One of the outcome constants, or ``None``.
    :rtype: str or None
    """
    text = text or ""
    return _last_outcome(_ASIDE_RE.sub(" ", text)) or _last_outcome(text)


def _last_outcome(text):
    last = None
    for match in _OUTCOME_WORD_RE.finditer(text):
        last = match.lastgroup
    return _OUTCOME_BY_GROUP.get(last)


def _subheading_pattern(labels):
    """Compile a line-start sub-heading pattern for the given label alternatives.

    A sub-heading is the label, optionally followed by a parenthetical
    qualifier and emphasis, and then either a colon (inline content may
    follow) or the end of the line.
    """
    return re.compile(
        r"^[ \t>#*_\-•+]*(?P<label>" + labels + r")[ \t]*(?:\([^)\n]*\))?"
        r"[ \t]*[*_]*[ \t]*(?::|(?=[ \t]*$))[ \t*_]*",
        re.IGNORECASE | re.MULTILINE,
    )


_SUBHEADING_LABELS = (
    r"acceptances?|accepted|admitted"
    r"|waitlist(?:ed|s)?|wait[- ]list(?:ed|s)?"
    r"|rejections?|rejected|denied|denials"
    r"|deferr(?:ed|als?)|deferred|deferrals"
)

_SUBHEADING_RE = _subheading_pattern(_SUBHEADING_LABELS)

# The bare markers that open a decisions region in posts without a Decisions heading
_LOOSE_MARKER_RE = _subheading_pattern(r"acceptances?|rejections?|waitlist(?:ed|s)?")

# Sub-headings nested inside the bold Decisions heading
NESTED_DECISION_HEADING_RE = re.compile(
    r"(?:" + _SUBHEADING_LABELS + r")\b", re.IGNORECASE
)

_HEADING_LINE_RE = re.compile(r"^\s*#{1,6}\s")
_HASH_HEADING_RE = re.compile(r"^(?P<hashes>#{1,6})[ \t]*(?P<title>[^\n]*)$", re.MULTILINE)
_RESULTS_TITLE_RE = re.compile(r"results|decisions", re.IGNORECASE)

_SPOILER_LINE_RE = re.compile(
    r"^[ \t]*(?:[*\-•+]|\d{1,2}[.)])?[ \t]*(?P<school>[^\n]+?)[ \t]*[:\-–—]?[ \t]*"
    r"(?:>!|»)[ \t]*(?P<outcome>[^\n]+?)[ \t]*(?:!<|«)",
    re.MULTILINE,
)


def _label_outcome(label):
    return outcome_from_text(label) or ACCEPTED


def decisions_from_region(region):
    """Extract decisions from a region holding Acceptances / Waitlist / ... lists.

    Each sub-heading opens a sub-region that ends at the next sub-heading or
    the end of the region. Every line in a sub-region (including text after
    the heading's colon) is a candidate school for that outcome.

    :param region: Text of the decisions region.
    :type region: str
    :returns: Decisions in document order.
    :rtype: list[Decision]
    """
    if not region:
        return []

    headings = list(_SUBHEADING_RE.finditer(region))
    decisions = []
    for index, heading in enumerate(headings):
        end = headings[index + 1].start() if index + 1 < len(headings) else len(region)
        outcome = _label_outcome(heading.group("label"))
        for line in region[heading.end():end].splitlines():
            if not line.strip() or _HEADING_LINE_RE.match(line):
                continue
            decision = _decision_from_line(line, outcome)
            if decision is not None:
                decisions.append(decision)
    return decisions


# ============================================================
# STRATEGIES
# ============================================================

def spoiler_tag_decisions(text):
    """Strategy 1: ``<school>: >!Outcome!<`` lines anywhere in the post.

    ``»Outcome«`` is accepted as the same convention. Section boundaries
    are ignored because posts in this style often have no headings.
    """
    decisions = []
    for match in _SPOILER_LINE_RE.finditer(text or ""):
        outcome = outcome_from_text(match.group("outcome"))
        if outcome is None:
            continue
        decision = _decision_from_line(match.group("school"), outcome)
        if decision is not None:
            decisions.append(decision)
    return decisions


def labeled_section_decisions(text):
    """Strategy 2: the bold ``**Decisions**`` section."""
    section = extract_section(text, "Decision", nested=NESTED_DECISION_HEADING_RE)
    if section is None:
        return []
    return decisions_from_region(section)


def loose_subsection_decisions(text):
    """Strategy 3: everything from the first bare Acceptances / Rejections /
    Waitlist heading to the end of the post."""
    marker = _LOOSE_MARKER_RE.search(text or "")
    if marker is None:
        return []
    return decisions_from_region(text[marker.start():])


def hash_header_decisions(text):
    """Strategy 4: a ``#`` / ``##`` heading mentioning results or decisions.

    The region runs to the next heading of the same or a higher level.
    """
    headings = list(_HASH_HEADING_RE.finditer(text or ""))
    for index, heading in enumerate(headings):
        if not _RESULTS_TITLE_RE.search(heading.group("title")):
            continue
        level = len(heading.group("hashes"))
        end = len(text)
        for later in headings[index + 1:]:
            if len(later.group("hashes")) <= level:
                end = later.start()
                break
        decisions = decisions_from_region(text[heading.end():end])
        if decisions:
            return decisions
    return []


DECISION_STRATEGIES = (
    spoiler_tag_decisions,
    labeled_section_decisions,
    loose_subsection_decisions,
    hash_header_decisions,
)


def parse_decisions(text, strategies=DECISION_STRATEGIES):
    """Return the decisions found by the first strategy that finds any.

    :param text: Entity-decoded post body.
    :type text: str
    :param strategies: Ordered strategy functions, each mapping the body to
        a list of decisions.
    :type strategies: tuple
    :returns: Decisions from the winning strategy, or ``[]``.
    :rtype: list[Decision]
    """
    for strategy in strategies:
        decisions = strategy(text)
        if decisions:
            return decisions
    return []
