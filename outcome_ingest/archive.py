"""
Archive API client.

Fetches one page of posts at a time from the public post-search archive,
ordered oldest first and starting after a time cursor.
"""

# Import JSON for decoding API responses
import json

# Import logging for request diagnostics
import logging

# Import os to allow overriding the endpoint
import os

# Import socket for the read-timeout exception type
import socket

# Import urllib for HTTP requests
import urllib.parse
import urllib.request

# Import urllib errors for specific exception handling
from urllib.error import HTTPError, URLError

from datetime import datetime, timezone

logger = logging.getLogger(__name__)

# Post-search endpoint of the archive
ARCHIVE_BASE_URL = os.environ.get(
    "ARCHIVE_BASE_URL",
    "https://arctic-shift.photon-reddit.com/api/posts/search",
)

# Community the outcome posts are collected from
ARCHIVE_SUBREDDIT = "collegeresults"

# Posts per request
PAGE_SIZE = 100

# Seconds to wait between pages
REQUEST_DELAY_SECONDS = 2

# Seconds to wait after a failed request before retrying it
ERROR_BACKOFF_SECONDS = 5

# HTTP timeout in seconds
REQUEST_TIMEOUT_SECONDS = 30

USER_AGENT = "outcome-ingest/0.1 (admissions outcome research)"


class ArchiveFetchError(RuntimeError):
    """A page could not be fetched or decoded."""


def epoch_to_iso(epoch):
    """Format epoch seconds as an ISO-8601 UTC timestamp.

    :param epoch: Seconds since the epoch.
    :type epoch: int
    :rtype: str
    """
    return datetime.fromtimestamp(epoch, tz=timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_page_url(cursor=None, limit=PAGE_SIZE, subreddit=ARCHIVE_SUBREDDIT,
                   base_url=None):
    """Return the request URL for the page after *cursor*.

    The ``after`` parameter is left out when *cursor* is ``None``.

    :param cursor: Epoch seconds of the last processed post, or ``None``.
    :type cursor: int or None
    :rtype: str
    """
    params = {"subreddit": subreddit, "limit": limit, "sort": "asc"}
    if cursor is not None:
        params["after"] = epoch_to_iso(cursor)
    return f"{base_url or ARCHIVE_BASE_URL}?{urllib.parse.urlencode(params)}"


def fetch_page(cursor=None, limit=PAGE_SIZE, subreddit=ARCHIVE_SUBREDDIT,
               base_url=None):
    """Fetch one page of posts created after *cursor*.

    Every failure (non-2xx status, connection error, timeout, undecodable
    body, payload without a ``data`` list) is raised as
    :class:`ArchiveFetchError`; the caller decides whether to retry.

    :param cursor: Epoch seconds of the last processed post, or ``None`` for
        the start of the archive.
    :type cursor: int or None
    :param limit: Page size.
    :type limit: int
    :param subreddit: Community to search.
    :type subreddit: str
    :param base_url: Endpoint override, defaults to :data:`ARCHIVE_BASE_URL`.
    :type base_url: str or None
    :returns: Post objects as returned by the API.
    :rtype: list[dict]
    :raises ArchiveFetchError: If the page could not be fetched or decoded.
    """
    url = build_page_url(cursor, limit, subreddit, base_url)
    logger.debug("GET %s", url)

    request = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})
    try:
        with urllib.request.urlopen(request, timeout=REQUEST_TIMEOUT_SECONDS) as response:
            raw = response.read()
    except HTTPError as e:
        raise ArchiveFetchError(f"archive returned HTTP {e.code} for {url}") from e
    except URLError as e:
        raise ArchiveFetchError(f"archive unreachable: {e.reason}") from e
    except (socket.timeout, TimeoutError, OSError) as e:
        raise ArchiveFetchError(f"archive request failed: {e}") from e

    try:
        payload = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ArchiveFetchError("archive returned a body that is not JSON") from e

    data = payload.get("data") if isinstance(payload, dict) else None
    if not isinstance(data, list):
        raise ArchiveFetchError("archive response has no data list")
    return data
