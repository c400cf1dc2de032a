"""Exceptions raised by the booking layer and their HTTP status codes."""


class BookingError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ClientInputError(BookingError):
    """The request is missing a required field or carries a malformed one."""

    status_code = 400


class ConflictError(BookingError):
    """The requested slot was taken between search and reservation."""

    status_code = 409


class UpstreamServiceError(BookingError):
    """Any failure talking to the external calendar service, auth included."""

    status_code = 500
