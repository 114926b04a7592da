"""
Record types passed between the parsing stages.

``RawPost`` is what the archive hands us, ``ParsedPost`` is what the post
parser makes of it, and each ``Decision`` is one school outcome inside it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

# Admission outcomes, matching the store's admission_decision values
ACCEPTED = "accepted"
REJECTED = "rejected"
WAITLISTED = "waitlisted"
DEFERRED = "deferred"
OUTCOMES = (ACCEPTED, REJECTED, WAITLISTED, DEFERRED)

# Application rounds, matching the store's application_round values
EARLY_DECISION = "early_decision"
EARLY_ACTION = "early_action"
REGULAR = "regular"
ROLLING = "rolling"
ROUNDS = (EARLY_DECISION, EARLY_ACTION, REGULAR, ROLLING)


@dataclass(frozen=True)
class RawPost:
    """One post as returned by the archive API. Never modified."""

    id: str
    title: str
    body: str
    created_utc: int
    permalink: str = ""
    flair: Optional[str] = None
    score: int = 0

    @classmethod
    def from_api(cls, data):
        """Build a post from an archive API object.

        :param data: Post object from the API ``data`` array.
        :type data: dict
        :returns: The post.
        :rtype: RawPost
        :raises ValueError: If ``id`` or ``created_utc`` is missing,
            ``created_utc`` is not a representable timestamp, or a text field
            is not a string.
        """
        post_id = data.get("id")
        created = data.get("created_utc")
        if not post_id or created is None:
            raise ValueError("archive post is missing id or created_utc")
        try:
            created_utc = int(float(created))
            datetime.fromtimestamp(created_utc, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError) as exc:
            raise ValueError(f"bad created_utc {created!r} for post {post_id}") from exc

        text_fields = {}
        for key in ("title", "selftext", "permalink"):
            value = data.get(key)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"non-text {key} for post {post_id}")
            text_fields[key] = value or ""

        try:
            score = int(data.get("score") or 0)
        except (TypeError, ValueError):
            score = 0

        return cls(
            id=str(post_id),
            title=text_fields["title"],
            body=text_fields["selftext"],
            created_utc=created_utc,
            permalink=text_fields["permalink"],
            flair=data.get("link_flair_text"),
            score=score,
        )

    @property
    def url(self):
        """Public link to the post, or ``""`` when no permalink is known."""
        if not self.permalink:
            return ""
        if self.permalink.startswith("http"):
            return self.permalink
        return "https://www.reddit.com" + self.permalink


@dataclass(frozen=True)
class Decision:
    """One (school mention, outcome, round) fact from a post."""

    school_name: str
    outcome: str
    application_round: Optional[str] = None
    raw_text: str = ""

    def __post_init__(self):
        if self.outcome not in OUTCOMES:
            raise ValueError(f"unknown outcome {self.outcome!r}")
        if self.application_round is not None and self.application_round not in ROUNDS:
            raise ValueError(f"unknown application round {self.application_round!r}")


@dataclass
class Demographics:
    gender: Optional[str] = None
    race_ethnicity: Optional[str] = None
    state_of_residence: Optional[str] = None
    high_school_type: Optional[str] = None
    first_generation: Optional[bool] = None
    legacy: Optional[bool] = None
    locale: Optional[str] = None


@dataclass
class Academics:
    gpa_unweighted: Optional[float] = None
    gpa_weighted: Optional[float] = None
    sat_score: Optional[int] = None
    act_score: Optional[int] = None
    ap_courses: Optional[int] = None
    ib_courses: Optional[int] = None
    honors_courses: Optional[int] = None


@dataclass
class ParsedPost:
    """Structured content of one post; ``decisions`` is never empty."""

    decisions: List[Decision]
    admission_cycle: str
    demographics: Demographics = field(default_factory=Demographics)
    academics: Academics = field(default_factory=Academics)
    intended_major: Optional[str] = None
    extracurriculars: List[str] = field(default_factory=list)
