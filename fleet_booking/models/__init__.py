"""Data models for the booking API."""

from .booking import (
    CalendarMatch,
    Customer,
    Reservation,
    ReservationResult,
    ReserveRequest,
    SearchRequest,
    SearchResult,
)

__all__ = [
    "CalendarMatch",
    "Customer",
    "Reservation",
    "ReservationResult",
    "ReserveRequest",
    "SearchRequest",
    "SearchResult",
]
