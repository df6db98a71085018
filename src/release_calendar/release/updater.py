"""Poll, merge and publish release schedules from every source."""

from __future__ import annotations

import time
from collections.abc import Iterable, Sequence

from release_calendar.exceptions import ConfigurationError
from release_calendar.github.exceptions import GitHubRateLimitError
from release_calendar.logging import bind_source, get_logger
from release_calendar.schemas.release import Release, ReleaseSchedule

from .aliaser import ProjectNameAliaser
from .repository import InMemoryReleaseRepository
from .sources import ReleaseScheduleSource

logger = get_logger(__name__)


def merge_schedules(schedules: Iterable[ReleaseSchedule]) -> list[ReleaseSchedule]:
    """Combine schedules that share a project name.

    The first schedule seen for a name fixes its position; releases of later
    schedules with the same name are appended in encounter order. The input
    schedules are left unmodified.
    """
    merged: dict[str, ReleaseSchedule] = {}
    for schedule in schedules:
        existing = merged.get(schedule.project)
        if existing is None:
            merged[schedule.project] = ReleaseSchedule(schedule.project, list(schedule.releases))
        else:
            existing.releases.extend(schedule.releases)
    return list(merged.values())


class ReleaseUpdater:
    """Runs one poll cycle across all sources and replaces the snapshot.

    A source that fails contributes the schedules from its last successful
    poll (or nothing, if it has never succeeded), so one failing upstream
    never erases another's data. Configuration errors are not recoverable
    and abort the cycle.

    Usage:
        updater = ReleaseUpdater([github_source, ical_source], repository)
        releases = await updater.update_releases()
    """

    def __init__(
        self,
        sources: Sequence[ReleaseScheduleSource],
        repository: InMemoryReleaseRepository,
        aliaser: ProjectNameAliaser | None = None,
    ) -> None:
        self._sources = list(sources)
        self._repository = repository
        self._aliaser = aliaser or ProjectNameAliaser()
        self._last_results: dict[int, list[ReleaseSchedule]] = {}

    @property
    def sources(self) -> list[ReleaseScheduleSource]:
        return list(self._sources)

    async def update_releases(self) -> list[Release]:
        """Poll every source, merge by project name and publish.

        Returns:
            The releases now held by the repository

        Raises:
            ConfigurationError: If any source is misconfigured
        """
        start = time.monotonic()
        schedules: list[ReleaseSchedule] = []
        for index, source in enumerate(self._sources):
            schedules.extend(await self._poll(index, source))

        releases = [
            self._alias(release)
            for schedule in merge_schedules(schedules)
            for release in schedule.releases
        ]
        self._repository.set(releases)
        logger.info(
            "Published {} release(s) from {} source(s) in {:.2f}s",
            len(releases),
            len(self._sources),
            time.monotonic() - start,
        )
        return releases

    async def _poll(self, index: int, source: ReleaseScheduleSource) -> list[ReleaseSchedule]:
        log = bind_source(source.name)
        try:
            result = await source.get()
        except ConfigurationError:
            raise
        except GitHubRateLimitError as e:
            reset = e.reset_at.isoformat() if e.reset_at else "unknown"
            log.warning("Rate limit exceeded; keeping previous schedules (resets at {})", reset)
            return self._last_results.get(index, [])
        except Exception:
            log.exception("Failed to poll release schedules; keeping previous schedules")
            return self._last_results.get(index, [])

        self._last_results[index] = result
        log.debug("Received {} schedule(s)", len(result))
        return result

    def _alias(self, release: Release) -> Release:
        alias = self._aliaser.apply(release.project)
        if alias == release.project:
            return release
        return release.model_copy(update={"project": alias})
