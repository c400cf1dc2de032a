"""Pydantic models for booking requests and responses.

Request fields accept both the current camelCase names and the legacy
Spanish names (``fecha``, ``ciudadOrigen``, ``metrosCubicos`` ...) still
sent by older booking forms. Text fields take numbers too (phone numbers
often arrive as JSON numbers).
"""

from __future__ import annotations

import datetime as dt
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Customer(BaseModel):
    """Contact details written into the reservation event."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    name: str = Field("", validation_alias=AliasChoices("name", "nombre"))
    email: str = Field("", validation_alias=AliasChoices("email", "correo"))
    phone: str = Field("", validation_alias=AliasChoices("phone", "telefono"))

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value


class SearchRequest(BaseModel):
    """Body of ``POST /api/calendar/search``."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    date: Optional[dt.date] = Field(None, validation_alias=AliasChoices("date", "fecha"))
    origin_city: str = Field(
        "", validation_alias=AliasChoices("originCity", "ciudadOrigen")
    )
    volume: float = Field(0, validation_alias=AliasChoices("volume", "metrosCubicos"))
    service_type: str = Field(
        "", validation_alias=AliasChoices("serviceType", "tipoFlete")
    )

    @field_validator("date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("origin_city", "service_type", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("volume", mode="before")
    @classmethod
    def _blank_volume(cls, value: Any) -> Any:
        return 0 if _blank_to_none(value) is None else value


class ReserveRequest(BaseModel):
    """Body of ``POST /api/calendar/reserve``."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    calendar_id: Optional[str] = Field(None, validation_alias=AliasChoices("calendarId"))
    date: Optional[dt.date] = Field(None, validation_alias=AliasChoices("date", "fecha"))
    slot_start: Optional[dt.datetime] = Field(
        None, validation_alias=AliasChoices("slotStart", "slotISO")
    )
    origin: str = Field("", validation_alias=AliasChoices("origin", "origen"))
    destination: str = Field("", validation_alias=AliasChoices("destination", "destino"))
    service_type: str = Field(
        "", validation_alias=AliasChoices("serviceType", "tipoFlete")
    )
    volume: float = Field(0, validation_alias=AliasChoices("volume", "metrosCubicos"))
    distance_km: Optional[float] = Field(
        None, validation_alias=AliasChoices("distanceKm", "distanciaKm")
    )
    customer: Customer = Field(
        default_factory=Customer, validation_alias=AliasChoices("customer", "cliente")
    )

    @field_validator("calendar_id", "date", "slot_start", "distance_km", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("origin", "destination", "service_type", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("volume", mode="before")
    @classmethod
    def _blank_volume(cls, value: Any) -> Any:
        return 0 if _blank_to_none(value) is None else value

    @field_validator("customer", mode="before")
    @classmethod
    def _none_customer(cls, value: Any) -> Any:
        return {} if value is None else value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalendarMatch(_CamelModel):
    """The first vehicle calendar with room for the job, and its free starts."""

    calendar_id: str
    calendar_code: str
    vehicle_type: str
    max_volume: float
    available_slots: list[dt.datetime]


class SearchResult(_CamelModel):
    available: bool
    calendar: Optional[CalendarMatch] = None

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Reservation(_CamelModel):
    calendar_id: str
    start: dt.datetime
    end: dt.datetime
    event_id: str
    link: str = ""


class ReservationResult(_CamelModel):
    success: bool = True
    reservation: Reservation

    def to_response(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
