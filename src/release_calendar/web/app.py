"""FastAPI application serving the published release snapshot.

Endpoints:
- GET /releases: releases in a date range as calendar-widget events (JSON)
- GET /ical: all releases as an iCalendar feed
"""

from __future__ import annotations

import datetime as dt
from collections.abc import AsyncIterator, Awaitable, Callable, Sequence
from contextlib import asynccontextmanager
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import APIRouter, FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from release_calendar import __version__
from release_calendar.config import Settings, get_settings
from release_calendar.exceptions import ConfigurationError
from release_calendar.logging import get_logger
from release_calendar.release.repository import InMemoryReleaseRepository
from release_calendar.release.scheduler import ReleaseUpdateScheduler
from release_calendar.schemas.enums import ReleaseType

from .calendar import calendar_name, to_event, to_ical

logger = get_logger(__name__)

APP_NAME = "release-calendar"

router = APIRouter()


def _parse_date(name: str, value: str) -> dt.date:
    try:
        return dt.date.fromisoformat(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid {name} date: {value!r}") from e


def _parse_type(value: str | None) -> ReleaseType | None:
    if value is None:
        return None
    try:
        return ReleaseType.parse(value)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid release type: {value!r}") from e


def _repository(request: Request) -> InMemoryReleaseRepository:
    repository: InMemoryReleaseRepository = request.app.state.repository
    return repository


@router.get("/releases")
def releases(
    request: Request,
    start: str = Query(description="First day of the period (yyyy-mm-dd)"),
    end: str = Query(description="Last day of the period (yyyy-mm-dd)"),
    type: str | None = Query(default=None, description="oss, enterprise or commercial"),
) -> list[dict[str, Any]]:
    start_date = _parse_date("start", start)
    end_date = _parse_date("end", end)
    release_type = _parse_type(type)
    today: dt.date = request.app.state.today()
    return [
        to_event(release, today)
        for release in _repository(request).find_all_of_type_in_period(
            release_type, start_date, end_date
        )
    ]


@router.get("/ical")
def ical(
    request: Request,
    type: str | None = Query(default=None, description="oss, enterprise or commercial"),
) -> Response:
    release_type = _parse_type(type)
    name = calendar_name(request.app.state.calendar_name, release_type)
    content = to_ical(_repository(request).find_all_of_type(release_type), name)
    return Response(content=content, media_type="text/calendar")


def create_app(
    settings: Settings | None = None,
    repository: InMemoryReleaseRepository | None = None,
    scheduler: ReleaseUpdateScheduler | None = None,
    today: Callable[[], dt.date] | None = None,
    on_shutdown: Sequence[Callable[[], Awaitable[None]]] = (),
) -> FastAPI:
    """Build the web application.

    Args:
        settings: Application settings (defaults to get_settings())
        repository: Snapshot served to readers
        scheduler: Started and stopped with the application, if given
        today: Returns the current date for overdue highlighting
               (defaults to today in the configured time zone)
        on_shutdown: Awaited in order once the scheduler has stopped, e.g.
                     closing the upstream clients its updater polls

    Returns:
        Configured FastAPI application

    Raises:
        ConfigurationError: If the configured time zone is unknown
    """
    settings = settings or get_settings()
    try:
        zone = ZoneInfo(settings.release.timezone)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown time zone: {settings.release.timezone!r}") from e

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if scheduler is not None:
            await scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                await scheduler.stop()
            for hook in on_shutdown:
                await hook()

    app = FastAPI(title=APP_NAME, version=__version__, lifespan=lifespan)
    app.state.repository = repository or InMemoryReleaseRepository()
    app.state.calendar_name = settings.web.calendar_name
    app.state.today = today or (lambda: dt.datetime.now(zone).date())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.web.cors_allowed_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.include_router(router)
    logger.debug("Web application created (CORS origins: {})", settings.web.cors_allowed_origins)
    return app
