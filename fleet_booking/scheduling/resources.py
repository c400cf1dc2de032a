"""Vehicle calendars described by their labels.

A vehicle calendar is labelled ``STATUS / City / CODE / VehicleType / 7m``.
The fields are not validated: a missing or malformed field falls back to a
default, and an unreadable capacity counts as unlimited.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from fleet_booking.calendar_providers.base import CalendarResource

UNLIMITED_CAPACITY = 9999.0
INACTIVE_MARKERS = ("inactivo", "pausado", "inactive", "paused")

_NUMBER_RE = re.compile(r"([0-9]+(?:\.[0-9]+)?)")


@dataclass
class VehicleCalendar:
    """A calendar resource with its label fields parsed out."""

    calendar_id: str
    code: str
    vehicle_type: str
    max_volume: float


def parse_vehicle_calendar(resource: CalendarResource) -> VehicleCalendar:
    label = resource.summary or ""
    parts = [part.strip() for part in label.split("/")]

    def field(index: int) -> str:
        return parts[index] if len(parts) > index else ""

    match = _NUMBER_RE.search(field(4))
    return VehicleCalendar(
        calendar_id=resource.id,
        code=field(2) or label,
        vehicle_type=field(3),
        max_volume=float(match.group(1)) if match else UNLIMITED_CAPACITY,
    )


def is_search_candidate(resource: CalendarResource, origin_city: str = "") -> bool:
    """Whether the label names ``origin_city`` and is not marked inactive or paused."""
    label = (resource.summary or "").lower()
    if not label:
        return False
    if origin_city and origin_city.lower() not in label:
        return False
    return not any(marker in label for marker in INACTIVE_MARKERS)
