"""Jira release schedule source."""

from .client import JiraClient, JiraClientError
from .schemas import JiraProject, JiraVersion
from .source import JiraProjectFilter, JiraReleaseScheduleSource

__all__ = [
    "JiraClient",
    "JiraClientError",
    "JiraProject",
    "JiraProjectFilter",
    "JiraReleaseScheduleSource",
    "JiraVersion",
]
