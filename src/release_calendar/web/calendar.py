"""Rendering of releases as calendar events and iCalendar feeds."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterable
from typing import Any

from icalendar import Calendar, Event

from release_calendar.schemas.enums import ReleaseStatus, ReleaseType
from release_calendar.schemas.release import Release

CLOSED_COLOR = "#6db33f"
OVERDUE_COLOR = "#d14"


def to_event(release: Release, today: dt.date) -> dict[str, Any]:
    """Convert a release to a calendar-widget event object."""
    event: dict[str, Any] = {
        "title": release.title,
        "allDay": True,
        "start": release.date.isoformat(),
    }
    if release.url:
        event["url"] = release.url
    if release.status == ReleaseStatus.CLOSED:
        event["backgroundColor"] = CLOSED_COLOR
    elif release.is_overdue(today):
        event["backgroundColor"] = OVERDUE_COLOR
    return event


def calendar_name(prefix: str, release_type: ReleaseType | None) -> str:
    """Name of the published calendar, e.g. 'Spring Enterprise Releases'."""
    if release_type == ReleaseType.ENTERPRISE:
        return f"{prefix} Enterprise Releases"
    if release_type == ReleaseType.OSS:
        return f"{prefix} OSS Releases"
    return f"{prefix} Releases"


def to_ical(releases: Iterable[Release], name: str) -> bytes:
    """Render releases as an iCalendar feed of all-day events."""
    calendar = Calendar()
    calendar.add("prodid", "-//release-calendar//EN")
    calendar.add("version", "2.0")
    calendar.add("x-wr-calname", name)
    for release in releases:
        event = Event()
        event.add("uid", f"{release.project}-{release.name}-{release.type}".replace(" ", "-"))
        event.add("summary", release.title)
        event.add("dtstart", release.date)
        event.add("dtend", release.date + dt.timedelta(days=1))
        if release.url:
            event.add("url", release.url)
        calendar.add_component(event)
    return calendar.to_ical()
