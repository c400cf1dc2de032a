"""Vehicle availability search and reservations on external calendars."""

__version__ = "0.1.0"
