"""
Command-line entry point for the outcome ingestion crawl.

Opens the database, makes sure the outcome table exists, picks the starting
cursor and runs :func:`outcome_ingest.ingest.crawl`, printing the report at
the end (also when the run is interrupted).
"""

import argparse
import logging
import sys

from datetime import datetime, timezone

import psycopg

from .ingest import (
    DEFAULT_MAX_POSTS,
    DEFAULT_TOP_UNRESOLVED,
    RunStats,
    crawl,
    print_report,
    starting_cursor,
)
from .load_data import create_connection, ensure_outcome_table
from .paths import STATE_FILE

logger = logging.getLogger(__name__)


def parse_cursor(value):
    """Parse ``--after`` as epoch seconds or an ISO-8601 timestamp.

    Timestamps without a zone are taken as UTC.

    :param value: Command-line value.
    :type value: str
    :returns: Epoch seconds.
    :rtype: int
    :raises argparse.ArgumentTypeError: If *value* is neither.
    """
    text = value.strip()
    if text.isdigit():
        return int(text)

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected epoch seconds or an ISO-8601 timestamp, got {value!r}"
        ) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())


def _non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return number


def build_parser():
    """Return the ``outcome-ingest`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="outcome-ingest",
        description="Ingest admissions outcome posts from the archive into the database.",
    )
    parser.add_argument(
        "--limit", type=_non_negative_int, default=DEFAULT_MAX_POSTS,
        help="Maximum number of posts to process (default: all).",
    )
    parser.add_argument(
        "--after", type=parse_cursor, default=None,
        help="Only ingest posts created after this epoch or ISO-8601 time; "
             "overrides the saved cursor.",
    )
    parser.add_argument(
        "--state-file", default=STATE_FILE,
        help="Where the crawl cursor is saved between runs.",
    )
    parser.add_argument(
        "--no-resume", action="store_true",
        help="Ignore the saved cursor and start from the default epoch.",
    )
    parser.add_argument(
        "--top-unresolved", type=_non_negative_int, default=DEFAULT_TOP_UNRESOLVED,
        help="How many unresolved school names to list in the report.",
    )
    parser.add_argument(
        "--log-level", default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def main(argv=None):
    """Run the crawl from the command line.

    :param argv: Arguments, defaults to ``sys.argv[1:]``.
    :type argv: list[str] or None
    :returns: Process exit status.
    :rtype: int
    """
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    conn = create_connection()
    if conn is None:
        print("Failed to connect to the database.", file=sys.stderr)
        return 1

    with conn:
        try:
            ensure_outcome_table(conn)
        except psycopg.Error as e:
            print(f"Could not prepare the admission_outcomes table: {e}", file=sys.stderr)
            return 1

        cursor = starting_cursor(args.after, args.state_file, resume=not args.no_resume)
        logger.info("Starting crawl after %d (limit %d)", cursor, args.limit)

        stats = RunStats()
        try:
            crawl(conn, start_cursor=cursor, max_posts=args.limit,
                  state_file=args.state_file, stats=stats)
        except KeyboardInterrupt:
            logger.warning("Interrupted; cursor %s is safe to resume from", stats.cursor)
        finally:
            print_report(stats, args.top_unresolved)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
