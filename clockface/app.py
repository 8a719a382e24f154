"""FastAPI application: routes, response classes and the per-route error boundary."""

from __future__ import annotations

import json
from collections.abc import Callable, Coroutine
from typing import Any
from urllib.parse import unquote

import structlog
from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from clockface import __version__
from clockface.config.settings import ClockSettings
from clockface.errors import ClockError, NotFound
from clockface.schemas import DateResponse, DifferenceResponse, TimeResponse
from clockface.service import Clock, ClockService, utc_now

log = structlog.get_logger(__name__)


class PrettyJSONResponse(JSONResponse):
    """JSON rendered with 4-space indentation and a trailing newline."""

    def render(self, content: Any) -> bytes:
        return (json.dumps(content, ensure_ascii=False, indent=4) + "\n").encode("utf-8")


def error_response(exc: ClockError) -> Response:
    return PrettyJSONResponse(exc.to_payload(), status_code=exc.status_code)


class ErrorBoundaryRoute(APIRoute):
    """Route class that turns every failure inside a handler into one response.

    Domain errors keep their status and message. Anything else becomes a bare
    500 so internals never reach the client.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()

        async def boundary(request: Request) -> Response:
            with structlog.contextvars.bound_contextvars(
                method=request.method, path=request.url.path
            ):
                try:
                    return await handler(request)
                except ClockError as exc:
                    log.info("request rejected", error=exc.code, detail=exc.detail)
                    return error_response(exc)
                except Exception:
                    log.exception("request failed")
                    return PlainTextResponse("Internal server error", status_code=500)

        return boundary


def get_service(request: Request) -> ClockService:
    return request.app.state.service


async def read_body(request: Request) -> Any:
    """Decode a JSON body. Empty or malformed bodies read as an empty object."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError:
        log.debug("ignoring malformed request body", size=len(raw))
        return {}


def _page(timestamp: str) -> HTMLResponse:
    return HTMLResponse(f"<h1>{timestamp}</h1>")


def _path_timezone(request: Request, decoded: str) -> str:
    # Match on the still-encoded path: the zone must arrive as one segment
    # ("Europe%2FLondon"), never as nested path parts.
    raw_path = request.scope.get("raw_path")
    segment = raw_path.decode("latin-1")[1:] if raw_path else decoded
    if not segment or "/" in segment or "." in segment:
        raise NotFound(f"no route for {request.url.path}")
    return unquote(segment)


api = APIRouter(route_class=ErrorBoundaryRoute, default_response_class=PrettyJSONResponse)
pages = APIRouter(route_class=ErrorBoundaryRoute, default_response_class=PrettyJSONResponse)


@api.post("/time", response_model=TimeResponse)
async def current_time(
    request: Request, service: ClockService = Depends(get_service)
) -> TimeResponse:
    tz = service.timezone_from_body(await read_body(request))
    return TimeResponse(time=service.timestamp(tz))


@api.post("/date", response_model=DateResponse)
async def current_date(
    request: Request, service: ClockService = Depends(get_service)
) -> DateResponse:
    tz = service.timezone_from_body(await read_body(request))
    return DateResponse(date=service.datestamp(tz))


@api.post("/datediff", response_model=DifferenceResponse)
async def date_difference(
    request: Request, service: ClockService = Depends(get_service)
) -> DifferenceResponse:
    return DifferenceResponse(difference=service.difference(await read_body(request)))


@pages.get("/ping")
async def ping() -> PlainTextResponse:
    return PlainTextResponse("OK")


@pages.get("/")
async def home(service: ClockService = Depends(get_service)) -> HTMLResponse:
    return _page(service.timestamp())


@pages.get("/{tz:path}")
async def home_in_timezone(
    request: Request, tz: str, service: ClockService = Depends(get_service)
) -> HTMLResponse:
    return _page(service.timestamp_in(_path_timezone(request, tz)))


async def _unmatched(request: Request, exc: StarletteHTTPException) -> Response:
    log.info("no matching route", method=request.method, path=request.url.path, status=exc.status_code)
    return error_response(NotFound())


def create_app(settings: ClockSettings | None = None, clock: Clock = utc_now) -> FastAPI:
    """Build the application around *settings* (defaults from the environment)."""
    settings = settings or ClockSettings()
    app = FastAPI(
        title="clockface",
        version=__version__,
        default_response_class=PrettyJSONResponse,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.service = ClockService(settings, clock=clock)

    # The catch-all timezone page is registered last so it never shadows the API.
    app.include_router(api, prefix=settings.api_prefix)
    app.include_router(pages)
    app.add_exception_handler(StarletteHTTPException, _unmatched)
    return app
