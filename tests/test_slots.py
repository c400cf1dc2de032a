"""Tests for the daily slot grid."""

from datetime import date, timedelta

from fleet_booking.scheduling.slots import (
    BUSINESS_TZ,
    day_bounds,
    generate_day_slots,
    hours_to_timedelta,
)


def test_default_grid_covers_operating_window():
    slots = generate_day_slots(date(2025, 11, 3))

    assert len(slots) == 2 * (20 - 6 + 1)
    assert slots[0].hour == 6 and slots[0].minute == 0
    assert slots[-1].hour == 20 and slots[-1].minute == 30


def test_slots_ascend_on_half_hours():
    slots = generate_day_slots(date(2025, 11, 3), start_hour=8, end_hour=12)

    assert len(slots) == 10
    assert all(b - a == timedelta(minutes=30) for a, b in zip(slots, slots[1:]))
    assert {s.minute for s in slots} == {0, 30}
    assert all(s.utcoffset() == timedelta(hours=-5) for s in slots)


def test_grid_is_restartable():
    day = date(2025, 11, 3)
    assert generate_day_slots(day) == generate_day_slots(day)


def test_day_bounds():
    start, end = day_bounds(date(2025, 11, 3))
    assert start.isoformat() == "2025-11-03T00:00:00-05:00"
    assert end.isoformat() == "2025-11-03T23:59:59-05:00"
    assert start.tzinfo == BUSINESS_TZ


def test_hours_to_timedelta_rounds_to_milliseconds():
    assert hours_to_timedelta(2.5) == timedelta(hours=2, minutes=30)
    assert hours_to_timedelta(1 / 3) == timedelta(minutes=20)
