"""Error taxonomy shared by the parsers, the service layer and the HTTP boundary.

Every error carries a fixed HTTP status and message. The route boundary in
:mod:`clockface.app` turns them into ``{"error": message}`` responses.
"""

from __future__ import annotations

from typing import ClassVar


class ClockError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code: ClassVar[int] = 400
    code: ClassVar[str] = "clock_error"
    message: ClassVar[str] = "Bad request"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.message)
        self.detail = detail

    def to_payload(self) -> dict[str, str]:
        return {"error": self.message}


class InvalidTimezone(ClockError):
    code = "invalid_timezone"
    message = "Invalid timezone"


class DateNotProvided(ClockError):
    code = "date_not_provided"
    message = "Date not provided"


class InvalidDate(ClockError):
    code = "invalid_date"
    message = "Invalid date"


class StartParamNotProvided(ClockError):
    code = "start_not_provided"
    message = "Start param not provided"


class EndParamNotProvided(ClockError):
    code = "end_not_provided"
    message = "End param not provided"


class NotFound(ClockError):
    status_code = 404
    code = "not_found"
    message = "Not found"
