"""Tests for vehicle calendar label parsing and candidate filtering."""

from fleet_booking.calendar_providers.base import CalendarResource
from fleet_booking.scheduling.resources import (
    UNLIMITED_CAPACITY,
    is_search_candidate,
    parse_vehicle_calendar,
)


def test_parse_full_label():
    vehicle = parse_vehicle_calendar(
        CalendarResource(id="cal-1", summary="ACTIVO / Pereira / TU-A0001 / Furgon / 7.5m")
    )
    assert vehicle.calendar_id == "cal-1"
    assert vehicle.code == "TU-A0001"
    assert vehicle.vehicle_type == "Furgon"
    assert vehicle.max_volume == 7.5


def test_malformed_label_falls_back_to_defaults():
    vehicle = parse_vehicle_calendar(CalendarResource(id="cal-2", summary="Pereira truck"))
    assert vehicle.code == "Pereira truck"
    assert vehicle.vehicle_type == ""
    assert vehicle.max_volume == UNLIMITED_CAPACITY


def test_unreadable_capacity_is_unlimited():
    vehicle = parse_vehicle_calendar(
        CalendarResource(id="cal-3", summary="ACTIVO / Cali / TU-C0003 / Camion / grande")
    )
    assert vehicle.max_volume == UNLIMITED_CAPACITY


def test_candidate_matches_city_case_insensitively():
    resource = CalendarResource(id="c", summary="ACTIVO / Pereira / TU-A0001 / Furgon / 7m")
    assert is_search_candidate(resource, "pereira")
    assert is_search_candidate(resource, "")
    assert not is_search_candidate(resource, "Manizales")


def test_inactive_and_paused_are_excluded():
    for status in ("INACTIVO", "Pausado", "inactive", "PAUSED"):
        resource = CalendarResource(id="c", summary=f"{status} / Pereira / TU-A0002 / Furgon / 7m")
        assert not is_search_candidate(resource, "Pereira")


def test_empty_label_is_excluded():
    assert not is_search_candidate(CalendarResource(id="c", summary=""), "")
