"""Study-day arithmetic for the daily affirmation schedule.

Every function here is pure: the current time is always passed in, so the
same inputs produce the same answer regardless of the wall clock.

Day boundaries are local midnights in the participant's time zone (``tz``).
Both instants are converted to that zone and reduced to calendar dates
before differencing, so a session at 01:00 on the day after a 23:00 signup
is study day 2, not "day 1.08".
"""

from __future__ import annotations

from datetime import UTC, datetime, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo

DAYS_PER_CYCLE = 7
SLOTS_PER_DAY = 2
AFFIRMATION_SLOTS = DAYS_PER_CYCLE * SLOTS_PER_DAY
COMPLETION_DAY = 7
EVENING_UNLOCK_HOUR = 18

__all__ = [
    "AFFIRMATION_SLOTS",
    "COMPLETION_DAY",
    "affirmation_index",
    "cycle_day",
    "get_zone",
    "has_completed_seven_days",
    "is_evening_unlocked",
    "parse_timestamp",
    "study_day",
]

TimestampLike = str | datetime


@lru_cache(maxsize=64)
def get_zone(name: str) -> tzinfo:
    """Return the tzinfo for an IANA zone name.

    Raises:
        zoneinfo.ZoneInfoNotFoundError: if the name is unknown.
    """
    if name.upper() == "UTC":
        return UTC
    return ZoneInfo(name)


def parse_timestamp(value: TimestampLike) -> datetime:
    """Return an aware datetime for an ISO-8601 string or datetime.

    Naive values are interpreted as UTC. A trailing ``Z`` is accepted.

    Raises:
        ValueError: if ``value`` is a string that is not ISO-8601.
    """
    if isinstance(value, datetime):
        moment = value
    else:
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        moment = datetime.fromisoformat(text)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


def study_day(start: TimestampLike, now: TimestampLike, tz: tzinfo = UTC) -> int:
    """Return the 1-based study day of ``now`` relative to ``start``.

    The start date itself is day 1. The result is zero or negative when
    ``now`` falls on a date before the start date.
    """
    start_date = parse_timestamp(start).astimezone(tz).date()
    now_date = parse_timestamp(now).astimezone(tz).date()
    return (now_date - start_date).days + 1


def cycle_day(day: int) -> int:
    """Map a study day onto its 0-based position in the 7-day cycle."""
    # Python's % already floors toward negative infinity, so the result
    # stays in [0, 6] for day <= 0 as well.
    return (day - 1) % DAYS_PER_CYCLE


def affirmation_index(
    start: TimestampLike,
    now: TimestampLike,
    is_morning: bool,
    tz: tzinfo = UTC,
) -> int:
    """Return the affirmation slot (0-13) to show at ``now``.

    Morning slots are even (0, 2, ..., 12) and evening slots odd
    (1, 3, ..., 13); the schedule repeats every seven study days.
    """
    return cycle_day(study_day(start, now, tz)) * SLOTS_PER_DAY + (0 if is_morning else 1)


def has_completed_seven_days(start: TimestampLike, now: TimestampLike, tz: tzinfo = UTC) -> bool:
    """Return True once the participant has reached study day 7."""
    return study_day(start, now, tz) >= COMPLETION_DAY


def is_evening_unlocked(
    now: TimestampLike,
    tz: tzinfo = UTC,
    unlock_hour: int = EVENING_UNLOCK_HOUR,
) -> bool:
    """Return True if the local hour at ``now`` is at or past ``unlock_hour``."""
    return parse_timestamp(now).astimezone(tz).hour >= unlock_hour
