"""Calendar provider abstractions and implementations."""

from .base import BookedInterval, CalendarEvent, CalendarProvider, CalendarResource

__all__ = ["BookedInterval", "CalendarEvent", "CalendarProvider", "CalendarResource"]
