# tests/conftest.py
import re
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so `outcome_ingest` is importable without installing
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


# ------------------------------
# Canonical schools used by the fake store
# ------------------------------
SCHOOLS = [
    ("00000000-0000-0000-0000-000000000001", "Massachusetts Institute of Technology"),
    ("00000000-0000-0000-0000-000000000002", "Harvard University"),
    ("00000000-0000-0000-0000-000000000003", "Boston University"),
    ("00000000-0000-0000-0000-000000000004", "Boston College"),
    ("00000000-0000-0000-0000-000000000005", "University of California-Los Angeles"),
    ("00000000-0000-0000-0000-000000000006", "Cornell University"),
    ("00000000-0000-0000-0000-000000000007", "Rice University"),
    ("00000000-0000-0000-0000-000000000008", "Duke University"),
]


def _query_text(query):
    """Render a psycopg ``sql.SQL`` object (or plain string) as text."""
    return query.as_string(None) if hasattr(query, "as_string") else str(query)


def _unescape_like(pattern):
    return re.sub(r"\\(.)", r"\1", pattern)


class FakeCursor:
    """Fake psycopg3 cursor that answers the pipeline's queries in memory.

    Queries are routed by SQL fragment: exact and ``ILIKE`` school lookups
    read :attr:`FakeConnection.schools`, and outcome inserts enforce the
    ``(source_post_id, school_id)`` unique constraint like the real table.
    """

    def __init__(self, conn):
        self.conn = conn
        self.rows = []
        self.rowcount = -1

    def execute(self, query, params=None):
        text = _query_text(query)
        self.conn.executed.append((text, params))

        if self.conn.fail_on and self.conn.fail_on in text:
            raise self.conn.error

        self.rows = []
        if "CREATE TABLE" in text:
            self.rowcount = -1
        elif "lower(name) = lower(%s)" in text:
            wanted = params[0].lower()
            self.rows = [
                (school_id,)
                for school_id, name in sorted(self.conn.schools, key=lambda s: s[1])
                if name.lower() == wanted
            ][:1]
        elif "ILIKE" in text:
            pattern, limit = params
            needle = _unescape_like(pattern[1:-1]).lower()
            matches = sorted(
                (s for s in self.conn.schools if needle in s[1].lower()),
                key=lambda s: (len(s[1]), s[1]),
            )
            self.rows = [(school_id,) for school_id, _ in matches][:limit]
        elif "INSERT INTO admission_outcomes" in text:
            key = (params[0], params[1])
            if key in self.conn.outcomes:
                self.rowcount = 0
            else:
                self.conn.outcomes[key] = params
                self.rowcount = 1

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return list(self.rows)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        pass


class FakeConnection:
    """Fake psycopg3 connection holding the schools table and stored outcomes.

    Set ``fail_on`` to an SQL fragment and ``error`` to an exception instance
    to make matching statements raise.
    """

    def __init__(self, schools=None):
        self.schools = list(SCHOOLS if schools is None else schools)
        self.outcomes = {}
        self.executed = []
        self.fail_on = None
        self.error = None
        self.autocommit = True
        self.closed = False

    def cursor(self):
        return FakeCursor(self)

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


@pytest.fixture
def fake_conn():
    """Return a fresh in-memory fake connection."""
    return FakeConnection()


@pytest.fixture
def school_ids():
    """Map school names in the fake store to their ids."""
    return {name: school_id for school_id, name in SCHOOLS}


@pytest.fixture
def no_sleep(monkeypatch):
    """Replace ``time.sleep`` with a recorder and return the recorded delays."""
    import time

    delays = []
    monkeypatch.setattr(time, "sleep", delays.append)
    return delays


# ------------------------------
# Markers for pytest
# ------------------------------
def pytest_configure(config):
    config.addinivalue_line("markers", "parsing: field, section, decision and post parsers")
    config.addinivalue_line("markers", "resolver: school name resolution")
    config.addinivalue_line("markers", "db: database schema/inserts/lookups")
    config.addinivalue_line("markers", "crawl: archive client, cursor state and ingest loop")
    config.addinivalue_line("markers", "cli: command-line entry point")
