"""Request-level orchestration: raw body fields in, formatted values out.

The service never sees HTTP. It receives decoded request bodies as plain
mappings and either returns a value or raises a :class:`~clockface.errors.ClockError`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone, tzinfo
from typing import Any

import structlog

from clockface.config.settings import ClockSettings
from clockface.dates import DateParser, DateValue
from clockface.diff import DateRange, diff
from clockface.errors import EndParamNotProvided, StartParamNotProvided
from clockface.timezones import resolve_optional, resolve_timezone

log = structlog.get_logger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


class ClockService:
    """Stateless operations behind the HTTP routes."""

    def __init__(self, settings: ClockSettings, clock: Clock = utc_now) -> None:
        self.settings = settings
        self.clock = clock
        self.default_timezone = settings.default_tzinfo
        self.parser = DateParser(default_timezone=self.default_timezone)

    # --- current time ---

    def now(self, tz: tzinfo | None = None) -> datetime:
        zone = tz or self.default_timezone
        current = self.clock()
        return current.astimezone(zone) if zone is not None else current.astimezone()

    def timestamp(self, tz: tzinfo | None = None) -> str:
        return self.now(tz).strftime(self.settings.timestamp_format)

    def datestamp(self, tz: tzinfo | None = None) -> str:
        return self.now(tz).strftime(self.settings.date_format)

    def timestamp_in(self, identifier: str) -> str:
        """Current timestamp in the zone named by *identifier* (path lookups)."""
        return self.timestamp(resolve_timezone(identifier))

    # --- body handling ---

    def timezone_from_body(self, body: Any) -> tzinfo | None:
        """Resolve the optional ``tz`` field of a request body."""
        return resolve_optional(_as_mapping(body).get("tz"))

    def date_from_body(self, side: Any) -> DateValue:
        """Build one side of a difference request.

        The timezone is checked before the date is required, so a bad ``tz``
        wins over a missing ``date`` on the same side.
        """
        fields = _as_mapping(side)
        tz = resolve_optional(fields.get("tz"))
        return self.parser.parse(fields.get("date"), tz)

    def range_from_body(self, body: Any) -> DateRange:
        fields = _as_mapping(body)
        if fields.get("start") is None:
            raise StartParamNotProvided()
        if fields.get("end") is None:
            raise EndParamNotProvided()
        return DateRange(
            start=self.date_from_body(fields["start"]),
            end=self.date_from_body(fields["end"]),
        )

    def difference(self, body: Any) -> str:
        date_range = self.range_from_body(body)
        result = diff(date_range.start, date_range.end)
        log.debug(
            "difference computed",
            start=date_range.start.moment.isoformat(),
            end=date_range.end.moment.isoformat(),
            difference=result,
        )
        return result
