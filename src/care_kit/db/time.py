# src/care_kit/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def isoformat_utc(moment: datetime) -> str:
    """Render ``moment`` as an ISO-8601 UTC string with a ``Z`` suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")
