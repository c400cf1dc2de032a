"""Abstract base class for calendar providers.

Defines the interface the availability scanner and the reservation writer
use to read vehicle calendars and write booking events. Any calendar backend
(Google, an in-memory fake, etc.) implements this ABC.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass
class CalendarResource:
    """One vehicle calendar as listed by the provider."""

    id: str
    summary: str = ""


@dataclass
class BookedInterval:
    """An existing event's ``[start, end)`` window on a calendar."""

    start: datetime
    end: datetime
    event_id: str = ""


@dataclass
class CalendarEvent:
    """Represents a calendar event to be created."""

    summary: str
    start: datetime
    end: datetime
    description: str = ""
    timezone: str = ""  # IANA name sent alongside start/end


class CalendarProvider(ABC):
    """Abstract calendar backend.

    Subclasses must implement calendar listing, event listing and event
    creation. Implementations raise
    :class:`fleet_booking.errors.UpstreamServiceError` for any failure of
    the underlying service.
    """

    @abstractmethod
    async def list_calendars(self) -> list[CalendarResource]:
        """Return every calendar visible to the configured account,
        in the order the backend lists them."""

    @abstractmethod
    async def get_events(
        self,
        calendar_id: str,
        start: datetime,
        end: datetime,
    ) -> list[BookedInterval]:
        """Return events on ``calendar_id`` that intersect ``[start, end]``.

        Args:
            calendar_id: The calendar to query.
            start: Beginning of the window (events ending after it).
            end: End of the window (events starting before it).

        Returns:
            BookedInterval objects ordered by start time.
        """

    @abstractmethod
    async def create_event(
        self, calendar_id: str, event: CalendarEvent
    ) -> dict:
        """Create a calendar event.

        Args:
            calendar_id: The calendar to create the event on.
            event: Event details.

        Returns:
            Dict containing at least ``"event_id"`` and ``"html_link"``.
        """
