# outcome_ingest/paths.py
import os

# Base directory pointing to the package folder
BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "."))

# Directory holding crawl state between runs
STATE_DIR = os.path.join(BASE_DIR, "ingest_state")

# JSON file with the last fully processed cursor
STATE_FILE = os.environ.get(
    "OUTCOME_INGEST_STATE_FILE",
    os.path.join(STATE_DIR, "crawl_cursor.json"),
)
