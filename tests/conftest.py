"""Shared fixtures: an in-memory calendar backend and test settings."""

from datetime import datetime, timedelta, timezone

import pytest

from fleet_booking.calendar_providers.base import (
    BookedInterval,
    CalendarEvent,
    CalendarProvider,
    CalendarResource,
)
from fleet_booking.config import Settings
from fleet_booking.errors import UpstreamServiceError

BOGOTA = timezone(timedelta(hours=-5))


def at(hour: int, minute: int = 0, day: int = 3) -> datetime:
    """A November 2025 instant in business time."""
    return datetime(2025, 11, day, hour, minute, tzinfo=BOGOTA)


class InMemoryCalendarProvider(CalendarProvider):
    """CalendarProvider keeping calendars and events in dicts.

    Every call is recorded in ``calls`` so tests can assert which requests
    reached the backend. Setting ``error`` makes every call fail.
    """

    def __init__(self, calendars=None, events=None) -> None:
        self.calendars: list[CalendarResource] = list(calendars or [])
        self.events: dict[str, list[BookedInterval]] = {
            key: list(value) for key, value in (events or {}).items()
        }
        self.created: list[tuple[str, CalendarEvent]] = []
        self.calls: list[tuple] = []
        self.error: str | None = None

    def _check(self) -> None:
        if self.error:
            raise UpstreamServiceError(self.error)

    async def list_calendars(self):
        self.calls.append(("list_calendars",))
        self._check()
        return list(self.calendars)

    async def get_events(self, calendar_id, start, end):
        self.calls.append(("get_events", calendar_id, start, end))
        self._check()
        matching = [
            ev for ev in self.events.get(calendar_id, []) if ev.end > start and ev.start < end
        ]
        return sorted(matching, key=lambda ev: ev.start)

    async def create_event(self, calendar_id, event):
        self.calls.append(("create_event", calendar_id))
        self._check()
        event_id = f"evt_{len(self.created) + 1}"
        self.created.append((calendar_id, event))
        self.events.setdefault(calendar_id, []).append(
            BookedInterval(start=event.start, end=event.end, event_id=event_id)
        )
        return {
            "event_id": event_id,
            "html_link": f"https://calendar.google.com/event?eid={event_id}",
        }


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        _env_file=None,
        google_credentials_path=str(tmp_path / "credentials.json"),
    )


@pytest.fixture
def pereira_truck():
    return CalendarResource(id="pereira-1@group", summary="ACTIVO / Pereira / TU-A0001 / Furgon / 12m")


@pytest.fixture
def provider(pereira_truck):
    return InMemoryCalendarProvider(calendars=[pereira_truck])
