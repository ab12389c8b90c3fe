"""Timezone-aware date/time helpers for the reservation service."""

from datetime import datetime, timezone


def get_now() -> datetime:
    """Get the current UTC datetime (used for soft-delete timestamps)."""
    return datetime.now(timezone.utc)


def format_timestamp(value: datetime) -> str:
    """Serialize a timestamp as ISO-8601."""
    return value.isoformat()


def parse_timestamp(value):
    """Parse a stored ISO-8601 timestamp; None stays None."""
    if value is None:
        return None
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
