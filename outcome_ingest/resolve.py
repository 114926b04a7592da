"""
School resolver.

Maps a cleaned school name to a canonical ``schools.id``. Lookups are tried
in a fixed order and the first one that produces an id wins:

1. the per-run cache (hits and misses are both cached),
2. case-insensitive exact name,
3. case-insensitive substring, accepted only when exactly one school matches,
4. the abbreviation table, then a substring lookup of the mapped name.

Names nothing resolves are counted under their lower-cased form so the
end-of-run report can list the most common ones.
"""

import logging

from collections import Counter

from .abbreviations import lookup_abbreviation
from .load_data import find_school_exact, find_schools_containing

logger = logging.getLogger(__name__)


class SchoolResolver:
    """Resolve school names against the ``schools`` table for one run.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    """

    def __init__(self, conn):
        self.conn = conn
        self.cache = {}
        self.unresolved = Counter()
        self.lookups = (
            self._exact_match,
            self._unique_substring_match,
            self._abbreviation_match,
        )

    def _exact_match(self, name):
        return find_school_exact(self.conn, name)

    def _unique_substring_match(self, name):
        matches = find_schools_containing(self.conn, name, limit=2)
        if len(matches) == 1:
            return matches[0]
        if matches:
            logger.debug("Ambiguous school name %r", name)
        return None

    def _abbreviation_match(self, name):
        full_name = lookup_abbreviation(name)
        if not full_name:
            return None
        matches = find_schools_containing(self.conn, full_name, limit=1)
        return matches[0] if matches else None

    def resolve(self, name):
        """Return the canonical school id for *name*, or ``None``.

        Database errors propagate and leave the cache untouched, so the same
        name is looked up again next time.

        :param name: Cleaned school name.
        :type name: str
        :returns: School id, or ``None`` when unresolved.
        :raises psycopg.Error: If a lookup query fails.
        """
        key = " ".join(name.lower().split())
        if not key:
            return None

        if key in self.cache:
            school_id = self.cache[key]
        else:
            school_id = None
            for lookup in self.lookups:
                school_id = lookup(name)
                if school_id is not None:
                    break
            self.cache[key] = school_id

        if school_id is None:
            self.unresolved[key] += 1
        return school_id

    def top_unresolved(self, n=20):
        """Return the *n* most frequent unresolved names with their counts.

        :rtype: list[tuple[str, int]]
        """
        return self.unresolved.most_common(n)
