"""Console entry point: ``clockface`` starts the HTTP server."""

from __future__ import annotations

import click
import uvicorn
from pydantic import ValidationError

from clockface import __version__
from clockface.app import create_app
from clockface.config.logging import configure_logging
from clockface.config.settings import ClockSettings


@click.command()
@click.version_option(version=__version__, prog_name="clockface")
@click.option("--host", default=None, help="Bind address.  [default: 0.0.0.0]")
@click.option("--port", default=None, type=int, help="Listen port.  [default: 8080]")
@click.option("--default-tz", "default_timezone", default=None, help="Zone used when a request names none.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and access lines.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
def main(
    host: str | None,
    port: int | None,
    default_timezone: str | None,
    verbose: bool,
    log_json: bool,
) -> None:
    """Serve current time, timezone conversion and date differences."""
    try:
        settings = ClockSettings.from_cli(
            host=host,
            port=port,
            default_timezone=default_timezone,
            verbose=verbose or None,
            log_json=log_json or None,
        )
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc

    configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    app = create_app(settings)
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
