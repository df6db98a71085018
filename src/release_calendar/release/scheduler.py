"""Periodic execution of the release updater."""

from __future__ import annotations

import asyncio
import contextlib
from time import monotonic

from release_calendar.logging import LogContext, get_logger

from .updater import ReleaseUpdater

logger = get_logger(__name__)


class ReleaseUpdateScheduler:
    """Runs ``ReleaseUpdater.update_releases`` at a fixed rate.

    The first update runs as soon as the scheduler starts. Updates start
    ``interval_seconds`` apart; one that overruns the interval is followed
    immediately by the next. Failures are logged and the next update still
    happens on schedule.
    """

    def __init__(self, updater: ReleaseUpdater, interval_seconds: float) -> None:
        self._updater = updater
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        """Start the update loop (no-op if already running)."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run(), name="release-updates")
        logger.info("Release updates scheduled every {}s", self._interval)

    async def stop(self) -> None:
        """Stop the update loop and wait for it to finish (no-op if stopped)."""
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Release updates stopped")

    async def _run(self) -> None:
        update = 0
        while True:
            update += 1
            started = monotonic()
            with LogContext(update=update):
                try:
                    await self._updater.update_releases()
                except Exception:
                    logger.exception("Release update failed")
            await asyncio.sleep(max(0.0, self._interval - (monotonic() - started)))
