"""Helpers for datetime normalization."""

from datetime import datetime


def parse_datetime(value) -> datetime:
    """Read a datetime or ISO 8601 string as a naive local datetime.

    Bank feeds send ISO strings with a trailing ``Z`` and tz-aware SQL
    columns return aware values, while date filters are built from naive
    local time. Everything is brought to naive local time here.

    Raises:
        ValueError: If the value is neither a datetime nor an ISO string.
    """
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = f"{text[:-1]}+00:00"
        value = datetime.fromisoformat(text)
    if not isinstance(value, datetime):
        raise ValueError(f"Unsupported date value: {value!r}")
    return to_naive_local(value)


def to_naive_local(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive passes through."""
    if moment.tzinfo is None or moment.utcoffset() is None:
        return moment.replace(tzinfo=None)
    return moment.astimezone().replace(tzinfo=None)


__all__ = ["parse_datetime", "to_naive_local"]
