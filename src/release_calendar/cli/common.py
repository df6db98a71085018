"""Helpers shared by the CLI commands.

Commands run their async work through ``run_async_command`` and build the
configured schedule sources with ``build_updater``, so that ``poll`` and
``serve`` publish exactly the same releases.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from enum import Enum
from typing import Annotated, TypeVar

import typer
from rich.console import Console

from release_calendar.config import Settings
from release_calendar.github import GitHubClient, GitHubReleaseScheduleSource
from release_calendar.ical import ICalReleaseScheduleSource
from release_calendar.jira import JiraClient, JiraProjectFilter, JiraReleaseScheduleSource
from release_calendar.release import (
    InMemoryReleaseRepository,
    ProjectNameAliaser,
    ReleaseScheduleSource,
    ReleaseUpdater,
)

console = Console()

T = TypeVar("T")


class OutputFormat(str, Enum):
    """How ``poll`` prints the releases it fetched."""

    TEXT = "text"
    JSON = "json"


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Run ``coro`` to completion and turn any failure into exit code 1.

    ``typer.Exit`` raised by the command itself passes through unchanged;
    any other exception is printed as ``<error_prefix>: <message>``.

    Example:
        async def _poll() -> list[Release]:
            ...

        releases = run_async_command(_poll(), error_prefix="Poll failed")
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option("--format", "-f", help="Print releases as a table or as JSON"),
]


# -----------------------------------------------------------------------------
# Source Wiring
# -----------------------------------------------------------------------------


def build_sources(settings: Settings, github_client: GitHubClient) -> list[ReleaseScheduleSource]:
    """Create the schedule sources enabled by the settings, in merge order."""
    sources: list[ReleaseScheduleSource] = [
        GitHubReleaseScheduleSource(
            github_client,
            settings.github.organizations,
            timezone=settings.release.timezone,
        )
    ]
    if settings.jira.enabled:
        sources.append(
            JiraReleaseScheduleSource(
                JiraClient(settings.jira.url, timeout=settings.jira.timeout_seconds),
                JiraProjectFilter(settings.jira.project_keys),
            )
        )
    if settings.ical.projects:
        sources.append(
            ICalReleaseScheduleSource(
                settings.ical.projects,
                timeout=settings.ical.timeout_seconds,
            )
        )
    return sources


def build_updater(
    settings: Settings,
    github_client: GitHubClient,
    repository: InMemoryReleaseRepository,
) -> ReleaseUpdater:
    """Create an updater publishing every configured source into ``repository``."""
    return ReleaseUpdater(
        build_sources(settings, github_client),
        repository,
        ProjectNameAliaser(settings.release.project_aliases),
    )


def create_github_client(settings: Settings) -> GitHubClient:
    """Create a GitHub client from the configured token, API URL and timeout."""
    return GitHubClient(
        settings.github_token,
        api_url=settings.github.api_url,
        timeout=settings.github.timeout_seconds,
    )
