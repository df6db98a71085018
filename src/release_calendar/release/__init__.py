"""Release aggregation: merging source schedules into the published snapshot."""

from .aliaser import ProjectNameAliaser
from .repository import InMemoryReleaseRepository
from .scheduler import ReleaseUpdateScheduler
from .sources import ReleaseScheduleSource
from .updater import ReleaseUpdater, merge_schedules

__all__ = [
    "InMemoryReleaseRepository",
    "ProjectNameAliaser",
    "ReleaseScheduleSource",
    "ReleaseUpdateScheduler",
    "ReleaseUpdater",
    "merge_schedules",
]
