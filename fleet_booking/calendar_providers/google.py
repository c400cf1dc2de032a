"""Google Calendar provider implementation.

Uses a Google Cloud service account to interact with the Calendar API v3.
Every vehicle calendar must be shared with the service account. The key
file path comes from the constructor (normally ``GOOGLE_CREDENTIALS_PATH``).
"""

from __future__ import annotations

import asyncio
import logging
import threading
from datetime import date, datetime, time, timezone, tzinfo
from functools import partial
from typing import Any

import httplib2
from google.oauth2.service_account import Credentials
from google_auth_httplib2 import AuthorizedHttp
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from fleet_booking.errors import UpstreamServiceError

from .base import BookedInterval, CalendarEvent, CalendarProvider, CalendarResource

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar"]


class GoogleCalendarProvider(CalendarProvider):
    """CalendarProvider backed by Google Calendar API v3.

    The API client is built on first use so that a missing or invalid key
    file surfaces as an ``UpstreamServiceError`` on the request that needs
    it instead of preventing the server from starting.
    """

    def __init__(
        self,
        service_account_path: str,
        page_size: int = 250,
        default_tz: tzinfo = timezone.utc,
    ) -> None:
        if not service_account_path:
            raise ValueError(
                "Google service account JSON path must be provided via "
                "constructor argument or GOOGLE_CREDENTIALS_PATH env var."
            )
        self._service_account_path = service_account_path
        self._page_size = page_size
        self._default_tz = default_tz
        self._credentials = None
        self._service = None
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _load(self):
        """Read the key file and build the API client once, from a worker thread."""
        with self._lock:
            if self._service is None:
                self._credentials = Credentials.from_service_account_file(
                    self._service_account_path, scopes=SCOPES
                )
                self._service = build(
                    "calendar", "v3", credentials=self._credentials, cache_discovery=False
                )
        return self._service

    def _call(self, build_request) -> dict:
        """Build and execute one request on its own authorized connection.

        httplib2 connections are not thread-safe, so concurrent requests in
        the pool must not share the client's default transport.
        """
        service = self._load()
        http = AuthorizedHttp(self._credentials, http=httplib2.Http())
        return build_request(service).execute(http=http)

    async def _run_in_executor(self, func, *args, **kwargs) -> Any:
        """Run a synchronous Google API call in the default thread pool."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, partial(func, *args, **kwargs)
        )

    async def _execute(self, build_request) -> dict:
        """Run one API request off the event loop, translating any failure."""
        try:
            return await self._run_in_executor(self._call, build_request)
        except Exception as exc:
            raise UpstreamServiceError(_error_message(exc)) from exc

    @staticmethod
    def _to_rfc3339(dt: datetime) -> str:
        """Convert a datetime to an RFC 3339 string with timezone."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.isoformat()

    def _parse_event_time(self, value: dict) -> datetime:
        """Return the instant of an event boundary; all-day dates start at local midnight."""
        if value.get("dateTime"):
            text = value["dateTime"]
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            parsed = datetime.fromisoformat(text)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=self._default_tz)
            return parsed
        day = date.fromisoformat(value["date"])
        return datetime.combine(day, time(), tzinfo=self._default_tz)

    # ------------------------------------------------------------------
    # CalendarProvider interface
    # ------------------------------------------------------------------

    async def list_calendars(self) -> list[CalendarResource]:
        """Walk every page of the account's calendar list."""
        calendars: list[CalendarResource] = []
        page_token = None
        while True:
            response = await self._execute(
                lambda service, token=page_token: service.calendarList().list(
                    maxResults=self._page_size, pageToken=token
                )
            )
            for item in response.get("items", []):
                calendars.append(
                    CalendarResource(id=item["id"], summary=item.get("summary", "") or "")
                )
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        return calendars

    async def get_events(
        self,
        calendar_id: str,
        start: datetime,
        end: datetime,
    ) -> list[BookedInterval]:
        """List single (expanded) events in the window, ordered by start."""
        intervals: list[BookedInterval] = []
        page_token = None
        while True:
            response = await self._execute(
                lambda service, token=page_token: service.events().list(
                    calendarId=calendar_id,
                    timeMin=self._to_rfc3339(start),
                    timeMax=self._to_rfc3339(end),
                    singleEvents=True,
                    orderBy="startTime",
                    maxResults=self._page_size,
                    pageToken=token,
                )
            )
            for item in response.get("items", []):
                intervals.append(
                    BookedInterval(
                        start=self._parse_event_time(item.get("start", {})),
                        end=self._parse_event_time(item.get("end", {})),
                        event_id=item.get("id", ""),
                    )
                )
            page_token = response.get("nextPageToken")
            if not page_token:
                break
        return intervals

    async def create_event(
        self, calendar_id: str, event: CalendarEvent
    ) -> dict:
        """Insert an event into the Google Calendar."""
        start: dict[str, Any] = {"dateTime": self._to_rfc3339(event.start)}
        end: dict[str, Any] = {"dateTime": self._to_rfc3339(event.end)}
        if event.timezone:
            start["timeZone"] = event.timezone
            end["timeZone"] = event.timezone

        body: dict[str, Any] = {
            "summary": event.summary,
            "start": start,
            "end": end,
        }
        if event.description:
            body["description"] = event.description

        result = await self._execute(
            lambda service: service.events().insert(calendarId=calendar_id, body=body)
        )

        logger.info("Created event %s on calendar %s", result["id"], calendar_id)

        return {
            "event_id": result["id"],
            "html_link": result.get("htmlLink", ""),
        }


def _error_message(exc: Exception) -> str:
    if isinstance(exc, HttpError) and getattr(exc, "reason", None):
        return str(exc.reason)
    return str(exc) or exc.__class__.__name__
