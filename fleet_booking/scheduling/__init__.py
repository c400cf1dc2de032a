"""Slot search and reservation rules for vehicle calendars."""

from .availability import AvailabilityScanner, find_free_slots
from .durations import estimate_service_hours, estimate_travel_hours
from .reservation import ReservationWriter
from .slots import generate_day_slots

__all__ = [
    "AvailabilityScanner",
    "ReservationWriter",
    "estimate_service_hours",
    "estimate_travel_hours",
    "find_free_slots",
    "generate_day_slots",
]
