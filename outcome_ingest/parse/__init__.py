"""
Parsing stages: raw post text in, structured outcome data out.
"""

from .decisions import clean_school_name, is_noise, parse_decisions
from .models import Decision, ParsedPost, RawPost
from .post import parse_post

__all__ = [
    "Decision",
    "ParsedPost",
    "RawPost",
    "clean_school_name",
    "is_noise",
    "parse_decisions",
    "parse_post",
]
