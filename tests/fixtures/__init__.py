"""Test fixtures for Release Calendar."""

from .ical_feeds import EMPTY_CALENDAR, SPRING_DATA_CALENDAR
from .jira_responses import (
    JIRA_GH_VERSIONS_RESPONSE,
    JIRA_PROJECTS_RESPONSE,
    JIRA_SPR_VERSIONS_RESPONSE,
    JIRA_URL,
)
from .rate_limit_responses import (
    HEADERS_EXHAUSTED,
    HEADERS_HEALTHY,
    RATE_LIMIT_RESPONSE_HEALTHY,
    make_rate_limit_headers,
)

__all__ = [
    # iCalendar feeds
    "EMPTY_CALENDAR",
    "SPRING_DATA_CALENDAR",
    # Jira API responses
    "JIRA_GH_VERSIONS_RESPONSE",
    "JIRA_PROJECTS_RESPONSE",
    "JIRA_SPR_VERSIONS_RESPONSE",
    "JIRA_URL",
    # Rate limits
    "HEADERS_EXHAUSTED",
    "HEADERS_HEALTHY",
    "RATE_LIMIT_RESPONSE_HEALTHY",
    "make_rate_limit_headers",
]
