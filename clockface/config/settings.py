"""Service settings: CLI flags, env vars and ``.env`` in one object.

Priority chain (highest to lowest):
  1. Init kwargs  - CLI flags passed by Click
  2. Env vars     - ``CLOCKFACE_*`` prefix
  3. ``.env`` file in the working directory
  4. Code defaults
"""

from __future__ import annotations

from datetime import tzinfo
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from clockface.errors import InvalidTimezone
from clockface.timezones import resolve_optional


class ClockSettings(BaseSettings):
    """Frozen settings handed to :func:`clockface.app.create_app`.

    Attributes:
        default_timezone: Zone used when a request names none. None means the
            host's local zone.
        timestamp_format: ``strftime`` layout of full timestamps.
        date_format: ``strftime`` layout of date-only responses.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="CLOCKFACE_",
        env_file=".env",
        extra="ignore",
    )

    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = "/api/v1"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    date_format: str = "%Y-%m-%d"
    default_timezone: str | None = None

    verbose: bool = False
    log_json: bool = False

    @field_validator("default_timezone")
    @classmethod
    def _known_timezone(cls, value: str | None) -> str | None:
        try:
            resolve_optional(value)
        except InvalidTimezone as exc:
            raise ValueError(f"unknown timezone {value!r}") from exc
        return value

    @field_validator("api_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = "/" + value
        return value

    @property
    def default_tzinfo(self) -> tzinfo | None:
        return resolve_optional(self.default_timezone)

    @classmethod
    def from_cli(cls, **cli_flags: Any) -> ClockSettings:
        """Construct settings from a CLI invocation.

        Flags left at None are dropped so env vars and defaults still apply.
        """
        return cls(**{key: value for key, value in cli_flags.items() if value is not None})
