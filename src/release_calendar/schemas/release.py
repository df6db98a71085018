"""Pydantic schemas for published releases and per-project schedules."""

import datetime as dt
from dataclasses import dataclass, field

from pydantic import Field

from .base import SchemaBase
from .enums import ReleaseStatus, ReleaseType


class Release(SchemaBase):
    """A single dated release of a project.

    One release corresponds to one scheduled GitHub milestone, one dated Jira
    version, or one calendar-feed event.
    """

    project: str = Field(description="Resolved project name (e.g., 'Spring Boot')")
    name: str = Field(description="Release name (e.g., '3.3.1')")
    date: dt.date = Field(description="Release date (serialized as yyyy-mm-dd)")
    status: ReleaseStatus = Field(default=ReleaseStatus.UNKNOWN)
    url: str | None = Field(default=None, description="Link to release details")
    type: ReleaseType = Field(default=ReleaseType.OSS)

    @property
    def title(self) -> str:
        """Human-readable title used by the events and iCalendar output."""
        title = f"{self.project} {self.name}"
        if self.type == ReleaseType.ENTERPRISE:
            title += " (Enterprise)"
        return title

    def is_overdue(self, today: dt.date) -> bool:
        """Whether the release is still open after its scheduled date."""
        return self.status == ReleaseStatus.OPEN and self.date < today


@dataclass
class ReleaseSchedule:
    """A project's releases, in the order they were discovered.

    Several sources may contribute schedules with the same project name; the
    updater concatenates their releases.
    """

    project: str
    """Project name used as the merge key (case-sensitive)."""

    releases: list[Release] = field(default_factory=list)
    """Releases in insertion order."""
