"""Date/time parsing helpers.

Provides tolerant ISO 8601 parsing used to validate timestamp filters
before they are sent upstream, including support for 'Z' suffix
normalization to '+00:00'.
"""

from __future__ import annotations

from datetime import datetime, timezone


def _replace_z_suffix(value: str) -> str:
    if value.endswith("Z"):
        return value[:-1] + "+00:00"
    return value


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO 8601 string into a timezone-aware datetime.

    Accepts values ending with 'Z' by converting to '+00:00'. Naive values
    are taken as UTC.

    Raises:
        ValueError: If the timestamp cannot be parsed.
    """

    normalized = _replace_z_suffix(value.strip())
    dt = datetime.fromisoformat(normalized)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
