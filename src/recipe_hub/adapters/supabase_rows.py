"""Helpers for turning PostgREST rows into domain values."""

import re
from datetime import datetime

UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, tolerating nulls."""
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def text_list(raw: object) -> list[str]:
    """Return a text[] column as a list of strings."""
    if not isinstance(raw, list):
        return []
    return [str(item) for item in raw]


def imatch_pattern(query: str) -> str:
    """Quote a regex that matches ``query`` literally, for an ``imatch`` filter."""
    quoted = re.escape(query).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{quoted}"'
