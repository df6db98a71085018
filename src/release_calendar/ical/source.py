"""Release schedule source backed by iCalendar feeds.

Each configured feed belongs to one project; every event in the feed is a
release of that project dated on the event's start.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence

import httpx
from icalendar import Calendar, Event

from release_calendar.config import ICalProjectConfig
from release_calendar.logging import get_logger
from release_calendar.schemas.enums import ReleaseStatus, ReleaseType
from release_calendar.schemas.release import Release, ReleaseSchedule

logger = get_logger(__name__)


def release_name(project: str, summary: str) -> str:
    """Derive a release name from an event summary.

    A leading project name is removed, so ``"Spring Data 2023.1.2"`` in the
    Spring Data feed becomes ``"2023.1.2"``.
    """
    if summary.startswith(project):
        return summary[len(project) :].strip()
    return summary


def _event_date(event: Event) -> dt.date | None:
    start = event.get("DTSTART")
    if start is None:
        return None
    value = getattr(start, "dt", None)
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return None


def parse_releases(project: str, content: bytes | str) -> list[Release]:
    """Parse every VEVENT of a feed into releases of ``project``.

    Events without a usable start date are skipped.

    Raises:
        ValueError: If the content is not an iCalendar stream
    """
    releases = []
    for calendar in Calendar.from_ical(content, multiple=True):
        for event in calendar.walk("VEVENT"):
            date = _event_date(event)
            if date is None:
                continue
            releases.append(
                Release(
                    project=project,
                    name=release_name(project, str(event.get("SUMMARY", ""))),
                    date=date,
                    status=ReleaseStatus.UNKNOWN,
                    url=None,
                    type=ReleaseType.OSS,
                )
            )
    return releases


class ICalReleaseScheduleSource:
    """Produces one release schedule per configured iCalendar feed.

    A feed that cannot be fetched or parsed contributes the releases parsed
    from it on the last successful poll.
    """

    name = "ical"

    def __init__(
        self,
        projects: Sequence[ICalProjectConfig],
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the source.

        Args:
            projects: Feeds to poll, in publication order
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (for testing)
        """
        self._projects = list(projects)
        self._timeout = timeout
        self._transport = transport
        self._previous: dict[str, list[Release]] = {}

    async def get(self) -> list[ReleaseSchedule]:
        """Fetch and parse every feed."""
        async with httpx.AsyncClient(
            timeout=self._timeout,
            transport=self._transport,
            follow_redirects=True,
        ) as client:
            return [
                ReleaseSchedule(project.name, await self._get_releases(client, project))
                for project in self._projects
            ]

    async def _get_releases(
        self, client: httpx.AsyncClient, project: ICalProjectConfig
    ) -> list[Release]:
        try:
            response = await client.get(project.calendar_url)
            response.raise_for_status()
            releases = parse_releases(project.name, response.content)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(
                "Failed to read calendar for {} from {}: {}",
                project.name,
                project.calendar_url,
                e,
            )
            return list(self._previous.get(project.name, []))

        self._previous[project.name] = releases
        logger.debug("Parsed {} release(s) for {}", len(releases), project.name)
        return releases
