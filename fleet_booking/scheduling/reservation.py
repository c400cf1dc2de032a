"""Reservation of a slot on a vehicle calendar.

The booked window is service time plus travel time plus a buffer that
separates the job from the previous one on the same vehicle. The day's
first job gets no buffer.

There is no lock between the conflict recheck and the event insert: two
concurrent reservations for overlapping windows can both succeed.
"""

from __future__ import annotations

import logging
from datetime import datetime

from fleet_booking.calendar_providers.base import CalendarEvent, CalendarProvider
from fleet_booking.config import Settings
from fleet_booking.errors import ClientInputError, ConflictError
from fleet_booking.models.booking import Reservation, ReservationResult, ReserveRequest

from .durations import estimate_service_hours, estimate_travel_hours
from .slots import day_bounds, hours_to_timedelta

logger = logging.getLogger(__name__)


class ReservationWriter:
    """Write a booking event onto a vehicle calendar after a conflict recheck."""

    def __init__(self, provider: CalendarProvider, settings: Settings) -> None:
        self._provider = provider
        self._settings = settings

    async def reserve(self, request: ReserveRequest) -> ReservationResult:
        missing = [
            name
            for name, value in (
                ("calendarId", request.calendar_id),
                ("date", request.date),
                ("slotStart", request.slot_start),
            )
            if value is None
        ]
        if missing:
            raise ClientInputError(f"Missing {', '.join(missing)}")

        calendar_id = request.calendar_id
        start = self._localize(request.slot_start)

        service_hours = estimate_service_hours(request.service_type, request.volume)
        travel_hours = estimate_travel_hours(
            request.distance_km,
            speed_kmh=self._settings.travel_speed_kmh,
            fallback_hours=self._settings.fallback_travel_hours,
        )

        day_start, _ = day_bounds(request.date, self._settings.business_tz)
        earlier_jobs = await self._provider.get_events(calendar_id, day_start, start)
        buffer_hours = self._settings.inter_job_buffer_hours if earlier_jobs else 0.0

        total_hours = service_hours + travel_hours + buffer_hours
        end = start + hours_to_timedelta(total_hours)

        conflicts = await self._provider.get_events(calendar_id, start, end)
        if conflicts:
            logger.warning(
                "Slot %s-%s on %s conflicts with %d event(s)",
                start.isoformat(),
                end.isoformat(),
                calendar_id,
                len(conflicts),
            )
            raise ConflictError("The slot is already taken (conflict while reserving).")

        event = CalendarEvent(
            summary=self._summary(request),
            description=self._description(request, total_hours),
            start=start,
            end=end,
            timezone=self._settings.calendar_timezone,
        )
        created = await self._provider.create_event(calendar_id, event)

        logger.info(
            "Reserved %s on %s from %s to %s (%.2fh)",
            created.get("event_id"),
            calendar_id,
            start.isoformat(),
            end.isoformat(),
            total_hours,
        )
        return ReservationResult(
            reservation=Reservation(
                calendar_id=calendar_id,
                start=start,
                end=end,
                event_id=created.get("event_id", ""),
                link=created.get("html_link", ""),
            )
        )

    def _localize(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=self._settings.business_tz)
        return value.astimezone(self._settings.business_tz)

    def _summary(self, request: ReserveRequest) -> str:
        return f"{self._settings.booking_summary_prefix} - {request.customer.name or 'Customer'}"

    @staticmethod
    def _description(request: ReserveRequest, total_hours: float) -> str:
        customer = request.customer
        return (
            f"Customer: {customer.name}\n"
            f"Phone: {customer.phone}\n"
            f"Email: {customer.email}\n"
            f"Service: {request.service_type}\n"
            f"Volume (m3): {request.volume:g}\n"
            f"Origin: {request.origin}\n"
            f"Destination: {request.destination}\n"
            f"Duration (h): {total_hours:.2f}"
        )
