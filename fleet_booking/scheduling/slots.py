"""Candidate start times for a working day."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo

BUSINESS_TZ = timezone(timedelta(hours=-5))

DEFAULT_START_HOUR = 6
DEFAULT_END_HOUR = 20
DEFAULT_INTERVAL_MINUTES = 30


def generate_day_slots(
    day: date,
    start_hour: int = DEFAULT_START_HOUR,
    end_hour: int = DEFAULT_END_HOUR,
    interval_minutes: int = DEFAULT_INTERVAL_MINUTES,
    tz: tzinfo = BUSINESS_TZ,
) -> list[datetime]:
    """Return every slot start from ``start_hour`` through ``end_hour`` inclusive.

    Each hour contributes ``60 // interval_minutes`` starts (``:00`` and
    ``:30`` with the default grid), ascending.
    """
    slots: list[datetime] = []
    for hour in range(start_hour, end_hour + 1):
        for minute in range(0, 60, interval_minutes):
            slots.append(datetime(day.year, day.month, day.day, hour, minute, tzinfo=tz))
    return slots


def day_bounds(day: date, tz: tzinfo = BUSINESS_TZ) -> tuple[datetime, datetime]:
    """Return ``00:00:00`` and ``23:59:59`` of ``day`` in ``tz``."""
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    return start, start + timedelta(hours=23, minutes=59, seconds=59)


def hours_to_timedelta(hours: float) -> timedelta:
    """Convert fractional hours to a timedelta rounded to the millisecond."""
    return timedelta(milliseconds=round(hours * 3600 * 1000))
