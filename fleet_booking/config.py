"""Application configuration via environment variables."""

from __future__ import annotations

import logging
import os
from datetime import timedelta, timezone

from pydantic_settings import BaseSettings

log = logging.getLogger("fleet_booking.config")


class Settings(BaseSettings):
    # Google Calendar
    google_credentials_path: str = "credentials.json"
    calendar_timezone: str = "America/Bogota"
    calendar_page_size: int = 250

    # Operating window and slot grid
    operating_start_hour: int = 6
    operating_end_hour: int = 20
    slot_interval_minutes: int = 30
    business_utc_offset_hours: int = -5

    # Duration rules
    travel_speed_kmh: float = 35.0
    fallback_travel_hours: float = 0.5
    inter_job_buffer_hours: float = 1.0

    # Reservation events
    booking_summary_prefix: str = "Reservation"

    # Server
    host: str = "0.0.0.0"
    port: int = 10000
    debug: bool = False
    log_level: str = "INFO"
    cors_allow_origins: list[str] = ["*"]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    @property
    def business_tz(self) -> timezone:
        """Fixed-offset timezone all slot arithmetic is anchored to."""
        return timezone(timedelta(hours=self.business_utc_offset_hours))

    def validate_startup(self) -> list[str]:
        """Validate configuration at startup. Returns warnings, raises on errors."""
        warnings: list[str] = []

        if not 0 <= self.operating_start_hour <= 23 or not 0 <= self.operating_end_hour <= 23:
            raise ValueError("Operating hours must be between 0 and 23.")
        if self.operating_start_hour > self.operating_end_hour:
            raise ValueError(
                "OPERATING_START_HOUR must not be later than OPERATING_END_HOUR."
            )
        if self.slot_interval_minutes <= 0 or 60 % self.slot_interval_minutes:
            raise ValueError("SLOT_INTERVAL_MINUTES must be a positive divisor of 60.")
        if self.travel_speed_kmh <= 0:
            raise ValueError("TRAVEL_SPEED_KMH must be positive.")

        if not os.path.isfile(self.google_credentials_path):
            warnings.append(
                f"GOOGLE_CREDENTIALS_PATH ({self.google_credentials_path}) does not exist. "
                "Calendar requests will fail until a service account key is provided."
            )

        if "*" in self.cors_allow_origins and not self.debug:
            warnings.append("CORS allows every origin. Restrict CORS_ALLOW_ORIGINS in production.")

        return warnings


settings = Settings()
