"""In-memory store for the published release snapshot."""

from __future__ import annotations

import datetime as dt
import threading
from collections.abc import Iterable

from release_calendar.schemas.enums import ReleaseType
from release_calendar.schemas.release import Release


class InMemoryReleaseRepository:
    """Holds the latest merged list of releases for concurrent readers.

    The snapshot is an immutable tuple that is replaced wholesale by ``set``.
    Readers always see either the previous or the new snapshot in full.
    """

    def __init__(self, releases: Iterable[Release] = ()) -> None:
        self._lock = threading.Lock()
        self._releases: tuple[Release, ...] = tuple(releases)

    def set(self, releases: Iterable[Release]) -> None:
        """Replace the snapshot with ``releases``."""
        snapshot = tuple(releases)
        with self._lock:
            self._releases = snapshot

    def find_all(self) -> tuple[Release, ...]:
        """Return the current snapshot."""
        with self._lock:
            return self._releases

    def find_all_of_type(self, release_type: ReleaseType | None) -> list[Release]:
        """Return releases of one type, or all releases when type is None."""
        return [
            release
            for release in self.find_all()
            if release_type is None or release.type == release_type
        ]

    def find_all_of_type_in_period(
        self,
        release_type: ReleaseType | None,
        start: dt.date,
        end: dt.date,
    ) -> list[Release]:
        """Return releases of a type dated between start and end, inclusive."""
        return [
            release
            for release in self.find_all_of_type(release_type)
            if start <= release.date <= end
        ]
