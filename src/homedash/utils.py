from datetime import UTC, datetime
from typing import Any


def now() -> datetime:
    return datetime.now(UTC)


def parse_instant(value: Any) -> datetime | None:
    """Parse an ISO 8601 string into an aware UTC datetime.

    Accepts a trailing ``Z`` and date-only values. Naive values are taken as UTC.
    Returns None for anything that is not a parseable string.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def clean_str(value: Any) -> str | None:
    """Return the stripped string, or None when the value is not a string."""
    if isinstance(value, str):
        return value.strip()
    return None
