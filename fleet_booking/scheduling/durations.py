"""Duration rules for freight jobs.

Service time depends on the kind of job and the cargo volume in cubic
metres; travel time is estimated from the route distance.
"""

from __future__ import annotations

import math
from typing import Any

FURNITURE_MARKERS = ("mobiliario", "furniture")
MOVE_MARKERS = ("mudanza", "move", "relocation")

FURNITURE_SERVICE_HOURS = 1 / 3  # 20 minutes of loading
DEFAULT_SERVICE_HOURS = 1.0

# (max volume in m3, inclusive) -> hours
MOVE_VOLUME_STEPS = (
    (7.5, 2.0),
    (12.0, 2.5),
    (17.0, 3.0),
    (26.0, 4.0),
    (33.0, 5.0),
)
MOVE_MAX_HOURS = 6.0

DEFAULT_TRAVEL_SPEED_KMH = 35.0
DEFAULT_FALLBACK_TRAVEL_HOURS = 0.5


def estimate_service_hours(service_type: str | None, volume: Any = 0) -> float:
    """Return the on-site service time in hours for a job."""
    kind = (service_type or "").lower()
    if any(marker in kind for marker in FURNITURE_MARKERS):
        return FURNITURE_SERVICE_HOURS

    if any(marker in kind for marker in MOVE_MARKERS):
        cubic_metres = _to_float(volume)
        for limit, hours in MOVE_VOLUME_STEPS:
            if cubic_metres <= limit:
                return hours
        return MOVE_MAX_HOURS

    return DEFAULT_SERVICE_HOURS


def estimate_travel_hours(
    distance_km: Any = None,
    speed_kmh: float = DEFAULT_TRAVEL_SPEED_KMH,
    fallback_hours: float = DEFAULT_FALLBACK_TRAVEL_HOURS,
) -> float:
    """Return the driving time in hours, or ``fallback_hours`` without a usable distance."""
    if isinstance(distance_km, bool):
        return fallback_hours
    try:
        distance = float(distance_km)
    except (TypeError, ValueError):
        return fallback_hours
    if not math.isfinite(distance) or distance <= 0:
        return fallback_hours
    return distance / speed_kmh


def _to_float(value: Any) -> float:
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0
