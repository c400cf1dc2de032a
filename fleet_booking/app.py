"""FastAPI application — HTTP endpoints for vehicle slot search and booking.

Endpoints:

  GET  /                        Plain-text health check
  POST /api/calendar/search     First vehicle with free slots on a day
  POST /api/calendar/reserve    Book a slot on a vehicle calendar

The search flow:
  1. List every calendar shared with the service account
  2. Keep active calendars for the origin city with enough capacity
  3. Return the first one with free slots for the estimated service time

The reserve flow:
  1. Compute service + travel + buffer duration from the job details
  2. Recheck the target window for events
  3. Insert the booking event and return its id and link
"""

from __future__ import annotations

# Load .env into os.environ before settings are read.
from dotenv import load_dotenv
load_dotenv()

import json
import logging
from typing import Any

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(name)-20s %(levelname)-7s %(message)s",
)

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError

from fleet_booking.calendar_providers.base import CalendarProvider
from fleet_booking.config import Settings, settings
from fleet_booking.errors import BookingError, ClientInputError, UpstreamServiceError
from fleet_booking.models.booking import ReserveRequest, SearchRequest
from fleet_booking.scheduling.availability import AvailabilityScanner
from fleet_booking.scheduling.reservation import ReservationWriter

log = logging.getLogger("fleet_booking.app")


def create_app(
    provider: CalendarProvider | None = None,
    app_settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        provider: Calendar backend to use. Defaults to a
                  GoogleCalendarProvider built from the configured key file.
        app_settings: Configuration. Defaults to the module-level settings.
    """
    cfg = app_settings or settings
    logging.getLogger().setLevel(cfg.log_level.upper())

    for warning in cfg.validate_startup():
        log.warning(warning)

    if provider is None:
        from fleet_booking.calendar_providers.google import GoogleCalendarProvider

        provider = GoogleCalendarProvider(
            service_account_path=cfg.google_credentials_path,
            page_size=cfg.calendar_page_size,
            default_tz=cfg.business_tz,
        )

    app = FastAPI(
        title="Fleet Booking API",
        description="Vehicle availability search and reservations on Google Calendar",
        version="0.1.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = cfg
    app.state.scanner = AvailabilityScanner(provider, cfg)
    app.state.writer = ReservationWriter(provider, cfg)

    # ── Error mapping ──────────────────────────────────────────

    @app.exception_handler(BookingError)
    async def booking_error_handler(request: Request, exc: BookingError) -> JSONResponse:
        if isinstance(exc, UpstreamServiceError):
            log.error("Error %s: %s", request.url.path, exc.message)
        return JSONResponse({"error": exc.message}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Error %s", request.url.path)
        return JSONResponse({"error": str(exc)}, status_code=500)

    # ── Health check ───────────────────────────────────────────

    @app.get("/", response_class=PlainTextResponse)
    async def health() -> str:
        return "Fleet booking API is running"

    # ── Availability search ────────────────────────────────────

    @app.post("/api/calendar/search")
    async def search(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        args = _parse(SearchRequest, payload)
        result = await request.app.state.scanner.search(args)
        return JSONResponse(result.to_response())

    @app.get("/api/calendar/search")
    async def search_wrong_method() -> JSONResponse:
        return JSONResponse(
            {
                "error": (
                    "Method not supported. Use POST /api/calendar/search with a JSON body "
                    'such as {"date": "2025-11-03", "originCity": "Pereira", '
                    '"serviceType": "mudanza", "volume": 10}.'
                )
            },
            status_code=405,
        )

    # ── Reservation ────────────────────────────────────────────

    @app.post("/api/calendar/reserve")
    async def reserve(request: Request) -> JSONResponse:
        payload = await _read_json(request)
        args = _parse(ReserveRequest, payload)
        result = await request.app.state.writer.reserve(args)
        return JSONResponse(result.to_response())

    @app.get("/api/calendar/reserve")
    async def reserve_wrong_method() -> JSONResponse:
        return JSONResponse(
            {
                "error": (
                    "Method not supported. Use POST /api/calendar/reserve with a JSON body "
                    "containing calendarId, date and slotStart."
                )
            },
            status_code=405,
        )

    return app


# ── Helper functions ──────────────────────────────────────────────

async def _read_json(request: Request) -> dict[str, Any]:
    """Return the request body as a JSON object; an empty body counts as ``{}``."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise ClientInputError("Request body must be valid JSON.") from exc
    if not isinstance(payload, dict):
        raise ClientInputError("Request body must be a JSON object.")
    return payload


def _parse(model, payload: dict[str, Any]):
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise ClientInputError(f"Invalid {field}: {first['msg']}") from exc


# ── Module-level app instance for uvicorn ──────────────────────

app = create_app()
