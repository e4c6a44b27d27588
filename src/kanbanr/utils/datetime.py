"""Utilities for datetime handling."""

from datetime import UTC, datetime


def now_utc() -> datetime:
    """Get current UTC datetime."""
    return datetime.now(UTC)


def now_millis() -> int:
    """Get current time as integer milliseconds since the epoch."""
    return int(now_utc().timestamp() * 1000)
