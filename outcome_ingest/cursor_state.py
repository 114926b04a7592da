"""
Persisted crawl cursor.

The cursor is the ``created_utc`` of the last post of the last fully
processed page. It is written after every page so a killed run can pick up
where it stopped.
"""

import json
import logging
import os
import tempfile

from datetime import datetime, timezone

from .paths import STATE_FILE

logger = logging.getLogger(__name__)


def load_cursor(path=STATE_FILE):
    """Return the saved cursor, or ``None`` when there is none.

    A missing file means a fresh start. An unreadable or malformed file is
    logged and ignored rather than guessed at.

    :param path: State file location.
    :type path: str
    :rtype: int or None
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            state = json.load(f)
    except FileNotFoundError:
        return None
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable cursor state %s: %s", path, e)
        return None

    cursor = state.get("cursor") if isinstance(state, dict) else None
    if isinstance(cursor, bool) or not isinstance(cursor, (int, float)):
        logger.warning("Ignoring cursor state %s without a numeric cursor", path)
        return None
    return int(cursor)


def save_cursor(cursor, path=STATE_FILE):
    """Atomically write *cursor* to the state file.

    The state is written to a temporary file in the same directory and moved
    into place, so a crash never leaves a half-written file behind.

    :param cursor: Epoch seconds of the last processed post.
    :type cursor: int
    :param path: State file location.
    :type path: str
    """
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    state = {
        "cursor": int(cursor),
        "updated_at": datetime.now(timezone.utc).isoformat(),
    }

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".cursor-", suffix=".json")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(state, f)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
