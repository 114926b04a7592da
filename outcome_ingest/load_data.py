"""
Database access for the ingestion pipeline.

Provides the PostgreSQL connection factory, the ``admission_outcomes`` table
definition, read-only lookups against the canonical ``schools`` table, and
the idempotent outcome insert. Every statement is built with
:mod:`psycopg.sql` and takes its values through ``%s`` placeholders.
"""

# Used for the post timestamp stored with each outcome
from datetime import datetime, timezone

# Used to log write failures
import logging

# Used to read database credentials from environment variables
import os

# Used for optional return type annotation on create_connection
from typing import Optional

# PostgreSQL database adapter for Python (psycopg3)
import psycopg

# sql module for safe SQL composition
from psycopg import sql

# Connection used as a typed parameter; OperationalError for connect failures
from psycopg import Connection, OperationalError

# Raised by the unique constraint on (source_post_id, school_id)
from psycopg.errors import UniqueViolation

from .parse.models import REGULAR

logger = logging.getLogger(__name__)

# Provenance values stamped on every ingested row
DATA_SOURCE = "external_archive"
VERIFICATION_TIER = "unverified"

# Insert results
INSERTED = "inserted"
DUPLICATE = "duplicate"

# Column order shared by outcome_row and the INSERT statement
OUTCOME_COLUMNS = (
    "source_post_id",
    "school_id",
    "decision",
    "application_round",
    "admission_cycle",
    "gpa_unweighted",
    "gpa_weighted",
    "sat_score",
    "act_score",
    "ap_courses",
    "ib_courses",
    "honors_courses",
    "intended_major",
    "extracurriculars",
    "gender",
    "race_ethnicity",
    "state_of_residence",
    "high_school_type",
    "first_generation",
    "legacy",
    "locale",
    "source_url",
    "posted_at",
    "data_source",
    "verification_tier",
)

CREATE_OUTCOME_TABLE = sql.SQL("""
    CREATE TABLE IF NOT EXISTS admission_outcomes (
      id SERIAL PRIMARY KEY,
      source_post_id TEXT NOT NULL,
      school_id UUID NOT NULL REFERENCES schools (id),
      decision TEXT NOT NULL
        CHECK (decision IN ('accepted', 'rejected', 'waitlisted', 'deferred')),
      application_round TEXT NOT NULL DEFAULT 'regular'
        CHECK (application_round IN
               ('early_decision', 'early_action', 'regular', 'rolling')),
      admission_cycle VARCHAR(9),
      gpa_unweighted NUMERIC(3, 2),
      gpa_weighted NUMERIC(3, 2),
      sat_score INTEGER,
      act_score INTEGER,
      ap_courses INTEGER,
      ib_courses INTEGER,
      honors_courses INTEGER,
      intended_major TEXT,
      extracurriculars TEXT[],
      gender TEXT,
      race_ethnicity TEXT,
      state_of_residence VARCHAR(2),
      high_school_type TEXT,
      first_generation BOOLEAN,
      legacy BOOLEAN,
      locale TEXT,
      source_url TEXT,
      posted_at TIMESTAMPTZ,
      data_source TEXT NOT NULL DEFAULT 'external_archive',
      verification_tier TEXT NOT NULL DEFAULT 'unverified',
      created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
      UNIQUE (source_post_id, school_id)
    );
""")

FIND_SCHOOL_EXACT = sql.SQL(
    "SELECT id FROM schools WHERE lower(name) = lower(%s) ORDER BY name LIMIT 1;"
)

FIND_SCHOOLS_CONTAINING = sql.SQL(
    "SELECT id FROM schools WHERE name ILIKE %s ORDER BY length(name), name LIMIT %s;"
)

INSERT_OUTCOME = sql.SQL("""
    INSERT INTO admission_outcomes ({columns})
    VALUES ({values})
    ON CONFLICT (source_post_id, school_id) DO NOTHING;
""").format(
    columns=sql.SQL(", ").join(map(sql.SQL, OUTCOME_COLUMNS)),
    values=sql.SQL(", ").join(sql.Placeholder() * len(OUTCOME_COLUMNS)),
)


def create_connection(
    db_name=None,
    db_user=None,
    db_password=None,
    db_host=None,
    db_port=None,
) -> Optional[Connection]:
    """Create and return an autocommit psycopg3 connection.

    A full libpq URL in ``DATABASE_URL`` wins when set. Otherwise each
    setting comes from the explicit argument, then the environment
    (``DB_NAME``, ``DB_USER``, ``DB_PASSWORD``, ``DB_HOST``, ``DB_PORT``),
    then a non-sensitive default. There is no password default.

    The connection runs in autocommit mode: every outcome insert stands on
    its own, so a failed insert never rolls back the ones before it.

    :param db_name: Name of the PostgreSQL database to connect to.
    :type db_name: str or None
    :param db_user: PostgreSQL username.
    :type db_user: str or None
    :param db_password: PostgreSQL password.
    :type db_password: str or None
    :param db_host: Host address of the PostgreSQL server.
    :type db_host: str or None
    :param db_port: Port the PostgreSQL server is listening on.
    :type db_port: str or None
    :returns: An open psycopg3 connection, or ``None`` on failure.
    :rtype: psycopg.Connection or None
    """
    database_url = os.environ.get("DATABASE_URL")

    try:
        if database_url and not any((db_name, db_user, db_password, db_host, db_port)):
            return psycopg.connect(database_url, autocommit=True)

        # Resolve each credential: explicit argument, env var, safe default
        return psycopg.connect(
            dbname=db_name or os.environ.get("DB_NAME", "admissions"),
            user=db_user or os.environ.get("DB_USER", "postgres"),
            password=db_password or os.environ.get("DB_PASSWORD", ""),
            host=db_host or os.environ.get("DB_HOST", "127.0.0.1"),
            port=db_port or os.environ.get("DB_PORT", "5432"),
            autocommit=True,
        )
    except OperationalError as e:
        logger.error("DB connection error: %s", e)
        return None


def ensure_outcome_table(conn: Connection) -> None:
    """Create the ``admission_outcomes`` table if it does not exist.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    """
    with conn.cursor() as cur:
        cur.execute(CREATE_OUTCOME_TABLE)


def escape_like(text):
    """Escape ``LIKE`` wildcards so *text* matches literally.

    :param text: Raw search text.
    :type text: str
    :rtype: str
    """
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def find_school_exact(conn: Connection, name):
    """Return the id of the school whose name equals *name*, ignoring case.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param name: Cleaned school name.
    :type name: str
    :returns: School id, or ``None``.
    """
    with conn.cursor() as cur:
        cur.execute(FIND_SCHOOL_EXACT, (name,))
        row = cur.fetchone()
    return row[0] if row else None


def find_schools_containing(conn: Connection, text, limit=2):
    """Return ids of schools whose name contains *text*, shortest name first.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param text: Substring to look for (case-insensitive, matched literally).
    :type text: str
    :param limit: Maximum number of ids to return.
    :type limit: int
    :returns: Matching school ids.
    :rtype: list
    """
    with conn.cursor() as cur:
        cur.execute(FIND_SCHOOLS_CONTAINING, (f"%{escape_like(text)}%", limit))
        rows = cur.fetchall()
    return [row[0] for row in rows]


def outcome_row(post, parsed, decision, school_id):
    """Build the parameter tuple for one ``admission_outcomes`` row.

    :param post: The archive post the decision came from.
    :type post: outcome_ingest.parse.models.RawPost
    :param parsed: Parsed content of *post*.
    :type parsed: outcome_ingest.parse.models.ParsedPost
    :param decision: The decision being stored.
    :type decision: outcome_ingest.parse.models.Decision
    :param school_id: Resolved canonical school id.
    :returns: Values in :data:`OUTCOME_COLUMNS` order.
    :rtype: tuple
    """
    demographics = parsed.demographics
    academics = parsed.academics

    return (
        post.id,
        school_id,
        decision.outcome,
        decision.application_round or REGULAR,
        parsed.admission_cycle,
        academics.gpa_unweighted,
        academics.gpa_weighted,
        academics.sat_score,
        academics.act_score,
        academics.ap_courses,
        academics.ib_courses,
        academics.honors_courses,
        parsed.intended_major,
        list(parsed.extracurriculars),
        demographics.gender,
        demographics.race_ethnicity,
        demographics.state_of_residence,
        demographics.high_school_type,
        demographics.first_generation,
        demographics.legacy,
        demographics.locale,
        post.url or None,
        datetime.fromtimestamp(post.created_utc, tz=timezone.utc),
        DATA_SOURCE,
        VERIFICATION_TIER,
    )


def insert_outcome(conn: Connection, row) -> str:
    """Insert one outcome row unless its (post, school) pair already exists.

    ``ON CONFLICT ... DO NOTHING`` makes a repeat a no-op; a
    :class:`~psycopg.errors.UniqueViolation` raised anyway (for example by a
    concurrent writer) is treated the same way. Any other database error
    propagates to the caller.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param row: Values in :data:`OUTCOME_COLUMNS` order, see :func:`outcome_row`.
    :type row: tuple
    :returns: :data:`INSERTED` or :data:`DUPLICATE`.
    :rtype: str
    """
    try:
        with conn.cursor() as cur:
            cur.execute(INSERT_OUTCOME, row)
            inserted = cur.rowcount
    except UniqueViolation:
        return DUPLICATE

    return INSERTED if inserted else DUPLICATE
