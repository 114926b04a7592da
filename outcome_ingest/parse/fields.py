"""
Field parsers for admissions-result posts.

Every parser here is a pure function that turns a fragment of post text
into a typed value. None of them raise: unrecognized or out-of-range input
is reported as ``None`` so that a single malformed field never costs the
rest of the post.
"""

# Import regular expressions for pattern matching
import re

# Import datetime for deriving the admission cycle from post timestamps
from datetime import datetime, timezone

from typing import Optional

# Placeholder values authors leave in template fields
_EMPTY_VALUES = {"", "n/a", "na", "x", "-", "--", "none", "tbd"}

# Characters removed before a number is parsed
_NUMERIC_NOISE_RE = re.compile(r"[,$€£\s_]")

# Unweighted / weighted GPA ceilings (4.0 scale with a little rounding slack)
UNWEIGHTED_CUTOFF = 4.01
UNWEIGHTED_MAX = 4.5
WEIGHTED_MAX = 6.0

SAT_RANGE = (400, 1600)
ACT_RANGE = (1, 36)

_NUMBER = r"(\d+(?:\.\d+)?)"

_GPA_UW_TAG_RE = re.compile(_NUMBER + r"\s*(?:unweighted|U\s?/?\s?W)\b", re.IGNORECASE)
_GPA_W_TAG_RE = re.compile(_NUMBER + r"\s*(?:weighted|W)\b", re.IGNORECASE)
_GPA_UW_LABEL_RE = re.compile(r"(?<![\w/])(?:unweighted|U\s?/?\s?W)\b\s*[:=]?\s*" + _NUMBER, re.IGNORECASE)
_GPA_W_LABEL_RE = re.compile(r"(?<![\w/])(?:weighted|W)\b\s*[:=]?\s*" + _NUMBER, re.IGNORECASE)
_GPA_PAIR_RE = re.compile(_NUMBER + r"\s*[/,|]\s*" + _NUMBER)
_GPA_SINGLE_RE = re.compile(_NUMBER)

_SAT_LABEL_FIRST_RE = re.compile(r"\bSAT\s*(?:I\s*)?(?:score\s*)?[:=\-]?\s*(\d[\d,]{2,4})", re.IGNORECASE)
_SAT_VALUE_FIRST_RE = re.compile(r"(\d[\d,]{2,4})\s*(?:on\s+(?:the\s+)?)?SAT\b", re.IGNORECASE)
_ACT_LABEL_FIRST_RE = re.compile(r"\bACT\s*(?:score\s*)?[:=\-]?\s*(\d{1,2})\b", re.IGNORECASE)
_ACT_VALUE_FIRST_RE = re.compile(r"\b(\d{1,2})\s*(?:on\s+(?:the\s+)?)?ACT\b", re.IGNORECASE)

_AP_COUNT_RE = re.compile(r"\b(\d+)\s*(?:APs|AP)\b", re.IGNORECASE)
_IB_COUNT_RE = re.compile(r"\b(\d+)\s*(?:IBs|IB)\b", re.IGNORECASE)
_HONORS_COUNT_RE = re.compile(r"\b(\d+)\s*(?:Honors|Hon)\b", re.IGNORECASE)

_STATE_CODE_RE = re.compile(r"\b([A-Z]{2})\b")

# 50 states plus the District of Columbia
STATE_CODES = {
    "alabama": "AL", "alaska": "AK", "arizona": "AZ", "arkansas": "AR",
    "california": "CA", "colorado": "CO", "connecticut": "CT",
    "delaware": "DE", "district of columbia": "DC", "florida": "FL",
    "georgia": "GA", "hawaii": "HI", "idaho": "ID", "illinois": "IL",
    "indiana": "IN", "iowa": "IA", "kansas": "KS", "kentucky": "KY",
    "louisiana": "LA", "maine": "ME", "maryland": "MD",
    "massachusetts": "MA", "michigan": "MI", "minnesota": "MN",
    "mississippi": "MS", "missouri": "MO", "montana": "MT",
    "nebraska": "NE", "nevada": "NV", "new hampshire": "NH",
    "new jersey": "NJ", "new mexico": "NM", "new york": "NY",
    "north carolina": "NC", "north dakota": "ND", "ohio": "OH",
    "oklahoma": "OK", "oregon": "OR", "pennsylvania": "PA",
    "rhode island": "RI", "south carolina": "SC", "south dakota": "SD",
    "tennessee": "TN", "texas": "TX", "utah": "UT", "vermont": "VT",
    "virginia": "VA", "washington": "WA", "west virginia": "WV",
    "wisconsin": "WI", "wyoming": "WY",
}

_VALID_STATE_CODES = set(STATE_CODES.values())

# Longest names first so "west virginia" wins over "virginia"
_STATE_NAMES_BY_LENGTH = sorted(STATE_CODES, key=len, reverse=True)

# Ordered (needle, category) checks; the first hit wins
_SCHOOL_TYPE_CHECKS = (
    ("private", "private"),
    ("public", "public"),
    ("charter", "charter"),
    ("magnet", "magnet"),
    ("homeschool", "homeschool"),
    ("home school", "homeschool"),
    ("home-school", "homeschool"),
    ("international", "international"),
)

# Locale words, "suburban" before "urban" since it contains it
_LOCALE_CHECKS = ("rural", "suburban", "urban")


def parse_number(text) -> Optional[float]:
    """Parse a loosely formatted number.

    Thousands separators and currency symbols are stripped first. Template
    placeholders (``"N/A"``, ``"X"``, empty string) and any text with
    non-numeric residue yield ``None``.

    :param text: Raw field text, or ``None``.
    :type text: str or None
    :returns: The parsed value, or ``None``.
    :rtype: float or None
    """
    if text is None:
        return None
    stripped = str(text).strip()
    if stripped.lower() in _EMPTY_VALUES:
        return None
    cleaned = _NUMERIC_NOISE_RE.sub("", stripped)
    if not cleaned:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def _in_range(value, low, high):
    return value is not None and low <= value <= high


def _bounded_gpa(unweighted, weighted):
    """Discard GPA values that fall outside the sanity bounds."""
    if unweighted is not None and not _in_range(unweighted, 0, UNWEIGHTED_MAX):
        unweighted = None
    if weighted is not None and not _in_range(weighted, 0, WEIGHTED_MAX):
        weighted = None
    return {"unweighted": unweighted, "weighted": weighted}


def _tagged_gpa(text, patterns):
    """Return ``(value, span)`` of the first tagged GPA, or ``(None, None)``."""
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            return float(match.group(1)), match.span(1)
    return None, None


def _untagged_gpa(text, tagged_spans):
    for match in _GPA_SINGLE_RE.finditer(text):
        if match.span(1) in tagged_spans:
            continue
        value = float(match.group(1))
        if 0 < value <= WEIGHTED_MAX:
            return value
    return None


def parse_gpa(text) -> dict:
    """Split a GPA field into unweighted and weighted values.

    Strategies, first one that yields anything wins:

    1. Explicit tags before or after the value: ``"3.95 UW"``, ``"W 4.3"``,
       ``"4.5 weighted"``. When only one side is tagged, the first other
       number fills the missing side if it fits the rule below
       (``"3.9/4.4 W"`` is 3.9 unweighted, 4.4 weighted).
    2. A pair ``a/b`` (or ``a, b``): the smaller value is unweighted when
       it is at most 4.01, and the larger value is weighted.
    3. A single bare number: unweighted when at most 4.01, else weighted.

    Values outside ``[0, 4.5]`` (unweighted) or ``[0, 6.0]`` (weighted) are
    dropped to ``None``.

    :param text: Raw GPA field text, or ``None``.
    :type text: str or None
    :returns: Dict with keys ``unweighted`` and ``weighted``.
    :rtype: dict[str, float or None]
    """
    if not text:
        return {"unweighted": None, "weighted": None}

    unweighted, uw_span = _tagged_gpa(text, (_GPA_UW_TAG_RE, _GPA_UW_LABEL_RE))
    weighted, w_span = _tagged_gpa(text, (_GPA_W_TAG_RE, _GPA_W_LABEL_RE))
    if unweighted is not None or weighted is not None:
        if unweighted is None or weighted is None:
            # Only one side is tagged; an untagged number may be the other
            other = _untagged_gpa(text, {uw_span, w_span})
            if other is not None:
                if unweighted is None and other <= UNWEIGHTED_CUTOFF and other <= weighted:
                    unweighted = other
                elif weighted is None and other > unweighted:
                    weighted = other
        return _bounded_gpa(unweighted, weighted)

    pair = _GPA_PAIR_RE.search(text)
    if pair:
        low, high = sorted((float(pair.group(1)), float(pair.group(2))))
        unweighted = low if low <= UNWEIGHTED_CUTOFF else None
        weighted = high if high > low else None
        if unweighted is None and weighted is None:
            weighted = high
        return _bounded_gpa(unweighted, weighted)

    single = _GPA_SINGLE_RE.search(text)
    if single:
        value = float(single.group(1))
        if value <= UNWEIGHTED_CUTOFF:
            return _bounded_gpa(value, None)
        return _bounded_gpa(None, value)

    return {"unweighted": None, "weighted": None}


def _labeled_score(text, patterns, low, high):
    """Return the first pattern hit whose value lies in ``[low, high]``."""
    if not text:
        return None
    for pattern in patterns:
        for match in pattern.finditer(text):
            value = parse_number(match.group(1))
            if value is not None and value.is_integer() and low <= value <= high:
                return int(value)
    return None


def parse_sat(text) -> Optional[int]:
    """Extract a composite SAT score (400-1600) from testing text.

    Accepts ``"SAT: 1520"``, ``"SAT I: 1,540 (770RW, 770M)"`` and
    ``"1500 SAT"``. Out-of-range values are discarded, never clamped.
    """
    return _labeled_score(
        text, (_SAT_LABEL_FIRST_RE, _SAT_VALUE_FIRST_RE), *SAT_RANGE
    )


def parse_act(text) -> Optional[int]:
    """Extract a composite ACT score (1-36) from testing text."""
    return _labeled_score(
        text, (_ACT_LABEL_FIRST_RE, _ACT_VALUE_FIRST_RE), *ACT_RANGE
    )


def parse_course_counts(text) -> dict:
    """Count AP, IB and honors courses mentioned in academics text.

    Each counter is taken from its own first ``<N> AP``, ``<N> IB`` or
    ``<N> Honors`` occurrence.

    :param text: Combined academics and testing text.
    :type text: str or None
    :returns: Dict with keys ``ap``, ``ib``, ``honors``.
    :rtype: dict[str, int or None]
    """
    counts = {"ap": None, "ib": None, "honors": None}
    if not text:
        return counts
    for key, pattern in (
        ("ap", _AP_COUNT_RE),
        ("ib", _IB_COUNT_RE),
        ("honors", _HONORS_COUNT_RE),
    ):
        match = pattern.search(text)
        if match:
            counts[key] = int(match.group(1))
    return counts


def parse_state(text) -> Optional[str]:
    """Find a US state (or DC) in a residence field.

    A two-letter postal code is preferred; otherwise the first full state
    name found in the text (case-insensitive) is used.

    :param text: Residence field text.
    :type text: str or None
    :returns: Two-letter state code, or ``None``.
    :rtype: str or None
    """
    if not text:
        return None

    for code in _STATE_CODE_RE.findall(text):
        if code in _VALID_STATE_CODES:
            return code

    lowered = text.lower()
    for name in _STATE_NAMES_BY_LENGTH:
        if name in lowered:
            return STATE_CODES[name]
    return None


def parse_school_type(text) -> Optional[str]:
    """Classify a free-text "type of school" field."""
    if not text:
        return None
    lowered = text.lower()
    for needle, category in _SCHOOL_TYPE_CHECKS:
        if needle in lowered:
            return category
    return None


def parse_locale(text) -> Optional[str]:
    """Return ``rural``, ``suburban`` or ``urban`` when the text names one."""
    if not text:
        return None
    lowered = text.lower()
    for locale in _LOCALE_CHECKS:
        if locale in lowered:
            return locale
    return None


def parse_flag(text, positive, negative) -> Optional[bool]:
    """Detect a yes/no hook such as first-generation or legacy status.

    :param text: Demographics text with template qualifiers removed.
    :type text: str or None
    :param positive: Pattern for a mention of the hook.
    :type positive: re.Pattern
    :param negative: Pattern for an explicit denial of the hook.
    :type negative: re.Pattern
    :returns: ``False`` when denied, ``True`` when mentioned, else ``None``.
    :rtype: bool or None
    """
    if not text:
        return None
    if negative.search(text):
        return False
    if positive.search(text):
        return True
    return None


def admission_cycle(created_epoch) -> str:
    """Derive the ``"YYYY-YYYY"`` admission cycle for a post timestamp.

    Posts from August onward belong to the cycle that starts that fall;
    posts from January to July belong to the cycle that started the
    previous fall.

    :param created_epoch: Post creation time in epoch seconds (UTC).
    :type created_epoch: int or float
    :returns: Admission cycle label, e.g. ``"2023-2024"``.
    :rtype: str
    """
    created = datetime.fromtimestamp(created_epoch, tz=timezone.utc)
    if created.month >= 8:
        return f"{created.year}-{created.year + 1}"
    return f"{created.year - 1}-{created.year}"
