"""Availability search across vehicle calendars.

Candidate vehicles are visited in the order the calendar provider lists
them and the first one with at least one free slot wins; the search does
not compare vehicles against each other.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable

from fleet_booking.calendar_providers.base import BookedInterval, CalendarProvider
from fleet_booking.config import Settings
from fleet_booking.errors import ClientInputError
from fleet_booking.models.booking import CalendarMatch, SearchRequest, SearchResult

from .durations import estimate_service_hours
from .resources import is_search_candidate, parse_vehicle_calendar
from .slots import day_bounds, generate_day_slots, hours_to_timedelta

logger = logging.getLogger(__name__)


def find_free_slots(
    day: date,
    booked: Iterable[BookedInterval],
    service_hours: float,
    settings: Settings,
) -> list[datetime]:
    """Return the slot starts of ``day`` whose service window hits no booking.

    The closing-time check only looks at the hour the job ends in (counted
    from midnight of ``day``), so with the default window a job ending at
    21:59 is still offered.
    """
    tz = settings.business_tz
    booked = list(booked)
    midnight, _ = day_bounds(day, tz)
    duration = hours_to_timedelta(service_hours)

    free: list[datetime] = []
    for slot_start in generate_day_slots(
        day,
        start_hour=settings.operating_start_hour,
        end_hour=settings.operating_end_hour,
        interval_minutes=settings.slot_interval_minutes,
        tz=tz,
    ):
        slot_end = slot_start + duration
        end_hour = (slot_end - midnight) // timedelta(hours=1)
        if slot_start.hour < settings.operating_start_hour:
            continue
        if end_hour > settings.operating_end_hour + 1:
            continue

        if any(slot_start < b.end and slot_end > b.start for b in booked):
            continue
        free.append(slot_start)
    return free


class AvailabilityScanner:
    """Find the first active vehicle in a city with room for a job on a day."""

    def __init__(self, provider: CalendarProvider, settings: Settings) -> None:
        self._provider = provider
        self._settings = settings

    async def search(self, request: SearchRequest) -> SearchResult:
        if request.date is None:
            raise ClientInputError("Missing date (YYYY-MM-DD)")

        logger.info(
            "Search: date=%s city=%r service=%r volume=%s",
            request.date,
            request.origin_city,
            request.service_type,
            request.volume,
        )

        calendars = await self._provider.list_calendars()
        candidates = [c for c in calendars if is_search_candidate(c, request.origin_city)]
        logger.debug("%d of %d calendars are candidates", len(candidates), len(calendars))

        day_start, day_end = day_bounds(request.date, self._settings.business_tz)
        service_hours = estimate_service_hours(request.service_type, request.volume)

        for resource in candidates:
            vehicle = parse_vehicle_calendar(resource)
            if vehicle.max_volume < request.volume:
                continue

            booked = await self._provider.get_events(vehicle.calendar_id, day_start, day_end)
            slots = find_free_slots(request.date, booked, service_hours, self._settings)
            if not slots:
                continue

            logger.info(
                "Calendar %s (%s) has %d free slots on %s",
                vehicle.code,
                vehicle.calendar_id,
                len(slots),
                request.date,
            )
            return SearchResult(
                available=True,
                calendar=CalendarMatch(
                    calendar_id=vehicle.calendar_id,
                    calendar_code=vehicle.code,
                    vehicle_type=vehicle.vehicle_type,
                    max_volume=vehicle.max_volume,
                    available_slots=slots,
                ),
            )

        logger.info("No availability on %s for city=%r", request.date, request.origin_city)
        return SearchResult(available=False)
