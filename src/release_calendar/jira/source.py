"""Release schedule source backed by Jira project versions."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable

from release_calendar.logging import get_logger
from release_calendar.schemas.enums import ReleaseStatus, ReleaseType
from release_calendar.schemas.release import Release, ReleaseSchedule

from .client import JiraClient
from .schemas import JiraProject, JiraVersion

logger = get_logger(__name__)


class JiraProjectFilter:
    """Selects the Jira projects whose versions are published.

    An empty allow-list includes every project.
    """

    def __init__(self, project_keys: Iterable[str] = ()) -> None:
        self._keys = frozenset(project_keys)

    def __call__(self, project: JiraProject) -> bool:
        return not self._keys or project.key in self._keys


class JiraReleaseScheduleSource:
    """Produces one release schedule per included Jira project.

    Each version with a release date becomes a release; released versions
    are closed, all others open.
    """

    name = "jira"

    def __init__(self, client: JiraClient, project_filter: JiraProjectFilter | None = None) -> None:
        self._client = client
        self._filter = project_filter or JiraProjectFilter()

    async def get(self) -> list[ReleaseSchedule]:
        """Fetch the versions of every included project.

        Raises:
            JiraClientError: If any request fails
        """
        schedules = []
        async with self._client:
            projects = [p for p in await self._client.get_projects() if self._filter(p)]
            for project in projects:
                versions = await self._client.get_versions(project)
                schedules.append(
                    ReleaseSchedule(
                        project=project.name,
                        releases=[
                            self._to_release(project, version, version.release_date)
                            for version in versions
                            if version.release_date is not None
                        ],
                    )
                )
        logger.info("Polled {} Jira project schedule(s)", len(schedules))
        return schedules

    def _to_release(
        self, project: JiraProject, version: JiraVersion, release_date: dt.date
    ) -> Release:
        return Release(
            project=project.name,
            name=version.name,
            date=release_date,
            status=ReleaseStatus.CLOSED if version.released else ReleaseStatus.OPEN,
            url=f"{self._client.url}/browse/{project.key}/fixforversion/{version.id}",
            type=ReleaseType.OSS,
        )
