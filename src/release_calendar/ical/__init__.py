"""iCalendar feed release schedule source."""

from .source import ICalReleaseScheduleSource, parse_releases, release_name

__all__ = ["ICalReleaseScheduleSource", "parse_releases", "release_name"]
