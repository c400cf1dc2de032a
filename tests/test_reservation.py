"""Tests for the reservation writer."""

from datetime import date, datetime, timedelta

import pytest

from fleet_booking.calendar_providers.base import BookedInterval
from fleet_booking.errors import ClientInputError, ConflictError, UpstreamServiceError
from fleet_booking.models.booking import Customer, ReserveRequest
from fleet_booking.scheduling.reservation import ReservationWriter

from .conftest import at

CALENDAR = "pereira-1@group"


def _reserve(**overrides) -> ReserveRequest:
    fields = dict(
        calendar_id=CALENDAR,
        date=date(2025, 11, 3),
        slot_start=at(8),
        origin="Cra 7 # 20-15, Pereira",
        destination="Calle 50 # 10-30, Dosquebradas",
        service_type="mudanza",
        volume=10,
        distance_km=70,
        customer=Customer(name="Ana Gomez", email="ana@example.com", phone="3001234567"),
    )
    fields.update(overrides)
    return ReserveRequest(**fields)


class TestBuffer:
    async def test_first_job_of_the_day_has_no_buffer(self, provider, test_settings):
        result = await ReservationWriter(provider, test_settings).reserve(_reserve())

        # 2.5h service + 2h travel
        assert result.reservation.start == at(8)
        assert result.reservation.end == at(12, 30)

    async def test_later_job_gets_one_hour_buffer(self, provider, test_settings):
        provider.events[CALENDAR] = [BookedInterval(start=at(6), end=at(7))]

        result = await ReservationWriter(provider, test_settings).reserve(_reserve())

        assert result.reservation.end == at(13, 30)

    async def test_previous_day_events_do_not_count(self, provider, test_settings):
        provider.events[CALENDAR] = [BookedInterval(start=at(20, day=2), end=at(22, day=2))]

        result = await ReservationWriter(provider, test_settings).reserve(_reserve())

        assert result.reservation.end == at(12, 30)

    async def test_travel_fallback_without_distance(self, provider, test_settings):
        result = await ReservationWriter(provider, test_settings).reserve(
            _reserve(distance_km=None, service_type="mobiliario")
        )
        # 20 min service + 30 min travel
        assert result.reservation.end == at(8, 50)


class TestEventWrite:
    async def test_event_carries_job_details(self, provider, test_settings):
        result = await ReservationWriter(provider, test_settings).reserve(_reserve())

        calendar_id, event = provider.created[0]
        assert calendar_id == CALENDAR
        assert event.summary == "Reservation - Ana Gomez"
        assert event.timezone == "America/Bogota"
        assert "Customer: Ana Gomez" in event.description
        assert "Phone: 3001234567" in event.description
        assert "Email: ana@example.com" in event.description
        assert "Service: mudanza" in event.description
        assert "Volume (m3): 10" in event.description
        assert "Origin: Cra 7 # 20-15, Pereira" in event.description
        assert "Destination: Calle 50 # 10-30, Dosquebradas" in event.description
        assert "Duration (h): 4.50" in event.description

        assert result.success is True
        assert result.reservation.event_id == "evt_1"
        assert result.reservation.link.endswith("evt_1")

    async def test_anonymous_customer(self, provider, test_settings):
        await ReservationWriter(provider, test_settings).reserve(_reserve(customer=Customer()))
        assert provider.created[0][1].summary == "Reservation - Customer"

    async def test_naive_slot_start_is_business_time(self, provider, test_settings):
        result = await ReservationWriter(provider, test_settings).reserve(
            _reserve(slot_start=datetime(2025, 11, 3, 8, 0))
        )
        assert result.reservation.start == at(8)
        assert result.reservation.start.utcoffset() == timedelta(hours=-5)

    async def test_utc_slot_start_is_converted(self, provider, test_settings):
        result = await ReservationWriter(provider, test_settings).reserve(
            _reserve(slot_start=datetime.fromisoformat("2025-11-03T13:00:00+00:00"))
        )
        assert result.reservation.start.isoformat() == "2025-11-03T08:00:00-05:00"


class TestConflicts:
    async def test_event_covering_the_slot_is_a_conflict(self, provider, test_settings):
        provider.events[CALENDAR] = [BookedInterval(start=at(8), end=at(10))]

        with pytest.raises(ConflictError):
            await ReservationWriter(provider, test_settings).reserve(_reserve())
        assert provider.created == []

    async def test_event_inside_the_job_window_is_a_conflict(self, provider, test_settings):
        provider.events[CALENDAR] = [BookedInterval(start=at(11), end=at(11, 30))]

        with pytest.raises(ConflictError):
            await ReservationWriter(provider, test_settings).reserve(_reserve())
        assert provider.created == []

    async def test_second_identical_reservation_conflicts(self, provider, test_settings):
        writer = ReservationWriter(provider, test_settings)
        await writer.reserve(_reserve())
        with pytest.raises(ConflictError):
            await writer.reserve(_reserve())
        assert len(provider.created) == 1


class TestValidation:
    @pytest.mark.parametrize("missing", ["calendar_id", "date", "slot_start"])
    async def test_required_fields(self, provider, test_settings, missing):
        with pytest.raises(ClientInputError):
            await ReservationWriter(provider, test_settings).reserve(_reserve(**{missing: None}))
        assert provider.calls == []

    async def test_write_failure_is_upstream_error(self, provider, test_settings):
        provider.error = "Rate Limit Exceeded"
        with pytest.raises(UpstreamServiceError, match="Rate Limit Exceeded"):
            await ReservationWriter(provider, test_settings).reserve(_reserve())
