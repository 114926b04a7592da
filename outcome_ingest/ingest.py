"""
Crawl/ingest loop.

Pages through the archive oldest first, parses every post, resolves each
decision's school and inserts one outcome row per (post, school) pair. The
cursor is saved after every fully processed page; together with the
idempotent insert this makes a run safe to kill and restart at any point.
"""

import logging
import time

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

import psycopg

from . import archive
from .cursor_state import load_cursor, save_cursor
from .load_data import INSERTED, insert_outcome, outcome_row
from .parse import RawPost, parse_post
from .paths import STATE_FILE
from .resolve import SchoolResolver

logger = logging.getLogger(__name__)

# 2020-01-01T00:00:00Z, the earliest posts worth ingesting
DEFAULT_START_EPOCH = 1577836800

# Effectively "everything the archive has"
DEFAULT_MAX_POSTS = 1_000_000_000

DEFAULT_TOP_UNRESOLVED = 20


@dataclass
class RunStats:
    """Counters for one crawl, printed in the end-of-run report."""

    pages: int = 0
    posts_fetched: int = 0
    posts_parsed: int = 0
    posts_unparsed: int = 0
    decisions_seen: int = 0
    outcomes_inserted: int = 0
    decisions_no_school: int = 0
    decisions_duplicate: int = 0
    posts_no_school: int = 0
    posts_all_duplicate: int = 0
    write_errors: int = 0
    fetch_errors: int = 0
    cursor: Optional[int] = None
    unresolved: Counter = field(default_factory=Counter)


def starting_cursor(after=None, state_file=STATE_FILE, resume=True):
    """Pick the cursor a run starts from.

    An explicit *after* always wins (operator override), then the saved
    state unless *resume* is false, then :data:`DEFAULT_START_EPOCH`.

    :rtype: int
    """
    if after is not None:
        return int(after)
    if resume:
        saved = load_cursor(state_file)
        if saved is not None:
            logger.info("Resuming from saved cursor %d", saved)
            return saved
    return DEFAULT_START_EPOCH


def _decode_page(items, cursor, stats):
    """Turn API objects into posts newer than *cursor*, oldest first."""
    posts = []
    for item in items:
        try:
            post = RawPost.from_api(item)
        except (AttributeError, ValueError) as e:
            stats.posts_fetched += 1
            stats.posts_unparsed += 1
            logger.warning("Skipping malformed archive post: %s", e)
            continue
        if cursor is not None and post.created_utc <= cursor:
            continue
        posts.append(post)
    posts.sort(key=lambda p: p.created_utc)
    return posts


def process_post(conn, resolver, post, stats):
    """Parse one post and store an outcome row for each resolvable decision.

    Parse misses, unresolved schools and duplicates are only counted. A
    database error on a lookup or insert is logged and skips that decision.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param resolver: Resolver shared across the run.
    :type resolver: outcome_ingest.resolve.SchoolResolver
    :param post: Archive post.
    :type post: outcome_ingest.parse.models.RawPost
    :param stats: Run counters, updated in place.
    :type stats: RunStats
    """
    stats.posts_fetched += 1

    parsed = parse_post(post)
    if parsed is None:
        stats.posts_unparsed += 1
        return
    stats.posts_parsed += 1

    resolved = 0
    duplicates = 0
    for decision in parsed.decisions:
        stats.decisions_seen += 1

        try:
            school_id = resolver.resolve(decision.school_name)
        except psycopg.Error as e:
            stats.write_errors += 1
            logger.error("School lookup failed for post %s (%r): %s",
                         post.id, decision.school_name, e)
            continue

        if school_id is None:
            stats.decisions_no_school += 1
            continue
        resolved += 1

        try:
            result = insert_outcome(conn, outcome_row(post, parsed, decision, school_id))
        except psycopg.Error as e:
            stats.write_errors += 1
            logger.error("Insert failed for post %s (%r): %s",
                         post.id, decision.school_name, e)
            continue

        if result == INSERTED:
            stats.outcomes_inserted += 1
        else:
            stats.decisions_duplicate += 1
            duplicates += 1

    if not resolved:
        stats.posts_no_school += 1
    elif duplicates == resolved:
        stats.posts_all_duplicate += 1


def crawl(conn, start_cursor=DEFAULT_START_EPOCH, max_posts=DEFAULT_MAX_POSTS,
          state_file=STATE_FILE, stats=None, resolver=None):
    """Ingest archive posts created after *start_cursor*.

    The loop ends normally when a page holds no new posts or when
    *max_posts* posts have been processed. A failed fetch is retried from
    the same cursor after :data:`archive.ERROR_BACKOFF_SECONDS`, so a page
    is never skipped.

    :param conn: An open psycopg3 database connection.
    :type conn: psycopg.Connection
    :param start_cursor: Epoch seconds; only later posts are ingested.
    :type start_cursor: int
    :param max_posts: Stop after processing this many posts.
    :type max_posts: int
    :param state_file: Where the cursor is saved after each page, or
        ``None`` to not persist it.
    :type state_file: str or None
    :param stats: Counters to update, so a caller keeps them if the crawl is
        interrupted.
    :type stats: RunStats or None
    :param resolver: School resolver; a fresh one is created when omitted.
    :type resolver: outcome_ingest.resolve.SchoolResolver or None
    :returns: Counters for the run.
    :rtype: RunStats
    """
    stats = stats if stats is not None else RunStats()
    resolver = resolver or SchoolResolver(conn)
    stats.unresolved = resolver.unresolved
    stats.cursor = start_cursor

    processed = 0
    while processed < max_posts:
        try:
            items = archive.fetch_page(stats.cursor)
        except archive.ArchiveFetchError as e:
            stats.fetch_errors += 1
            logger.warning("Fetch failed at cursor %s, retrying in %ss: %s",
                           stats.cursor, archive.ERROR_BACKOFF_SECONDS, e)
            time.sleep(archive.ERROR_BACKOFF_SECONDS)
            continue

        posts = _decode_page(items, stats.cursor, stats)
        if not posts:
            logger.info("No posts after cursor %s; done", stats.cursor)
            break

        stats.pages += 1
        for post in posts:
            if processed >= max_posts:
                break
            process_post(conn, resolver, post, stats)
            processed += 1
            stats.cursor = post.created_utc

        if state_file:
            save_cursor(stats.cursor, state_file)
        logger.info("Page %d done: %d posts, %d inserted so far, cursor %s",
                    stats.pages, stats.posts_fetched, stats.outcomes_inserted,
                    stats.cursor)

        if processed < max_posts:
            time.sleep(archive.REQUEST_DELAY_SECONDS)

    return stats


def format_report(stats, top_n=DEFAULT_TOP_UNRESOLVED):
    """Return the end-of-run report as a list of lines.

    :param stats: Counters from :func:`crawl`.
    :type stats: RunStats
    :param top_n: How many unresolved names to list.
    :type top_n: int
    :rtype: list[str]
    """
    lines = [
        "=== Ingest complete ===",
        f"Pages fetched:                 {stats.pages}",
        f"Posts fetched:                 {stats.posts_fetched}",
        f"Posts with decisions:          {stats.posts_parsed}",
        f"Posts without decisions:       {stats.posts_unparsed}",
        f"Decisions seen:                {stats.decisions_seen}",
        f"Outcomes inserted:             {stats.outcomes_inserted}",
        f"Decisions with no school:      {stats.decisions_no_school}",
        f"Decisions already stored:      {stats.decisions_duplicate}",
        f"Posts with no resolvable school: {stats.posts_no_school}",
        f"Posts skipped as duplicate:    {stats.posts_all_duplicate}",
        f"Write errors:                  {stats.write_errors}",
        f"Fetch errors:                  {stats.fetch_errors}",
    ]

    top = stats.unresolved.most_common(top_n)
    if top:
        lines.append(f"Top {len(top)} unresolved school names:")
        lines.extend(f"  {count:>5}  {name}" for name, count in top)

    if stats.cursor is not None:
        lines.append(f"Resume cursor: {stats.cursor} ({archive.epoch_to_iso(stats.cursor)})")
        lines.append(f"Resume with: outcome-ingest --after {stats.cursor}")
    return lines


def print_report(stats, top_n=DEFAULT_TOP_UNRESOLVED):
    """Print :func:`format_report` to stdout."""
    for line in format_report(stats, top_n):
        print(line)
