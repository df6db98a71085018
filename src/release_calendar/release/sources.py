"""The contract shared by every release schedule source."""

from typing import Protocol, runtime_checkable

from release_calendar.schemas.release import ReleaseSchedule


@runtime_checkable
class ReleaseScheduleSource(Protocol):
    """Anything that can produce per-project release schedules on demand."""

    name: str
    """Short identifier used in log messages (e.g., 'github')."""

    async def get(self) -> list[ReleaseSchedule]:
        """Return the source's current schedules, one per project."""
        ...
