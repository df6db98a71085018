"""Factory functions for creating test data.

This module provides factory functions for:
- GitHub API response dicts (repositories, milestones)
- Pydantic schemas (GitHubRepository, Release)
- FakeGitHubApi: an in-memory GitHub REST API behind httpx.MockTransport

Design principles:
- Factories provide sensible defaults that can be overridden
- Dict factories return data shaped like the GitHub REST API
"""

from __future__ import annotations

import datetime as dt
import hashlib
import json
from typing import Any

import httpx

from release_calendar.github.client import PAGE_SIZE, GitHubClient
from release_calendar.schemas import (
    GitHubRepository,
    Release,
    ReleaseStatus,
    ReleaseType,
)
from tests.conftest import JUN_20, JUN_20_ISO
from tests.fixtures.rate_limit_responses import make_rate_limit_headers

API_URL = "https://api.github.com"


# -----------------------------------------------------------------------------
# GitHub API Dict Factories
# -----------------------------------------------------------------------------
def make_github_repository(
    name: str = "spring-boot",
    *,
    organization: str = "spring-projects",
    visibility: str = "public",
    **overrides: Any,
) -> dict[str, Any]:
    """Create a repository dict as listed by GET /orgs/{org}/repos.

    Args:
        name: Repository name
        organization: Owning organization
        visibility: public, private or internal
        **overrides: Additional field overrides

    Returns:
        Dict suitable for GitHubRepository.model_validate()
    """
    full_name = f"{organization}/{name}"
    data = {
        "id": abs(hash(full_name)) % 10**8,
        "name": name,
        "full_name": full_name,
        "private": visibility != "public",
        "visibility": visibility,
        "html_url": f"https://github.com/{full_name}",
        "url": f"{API_URL}/repos/{full_name}",
        "milestones_url": f"{API_URL}/repos/{full_name}/milestones{{/number}}",
    }
    data.update(overrides)
    return data


def make_github_milestone(
    number: int = 1,
    *,
    title: str | None = None,
    state: str = "open",
    due_on: str | None = JUN_20_ISO,
    **overrides: Any,
) -> dict[str, Any]:
    """Create a milestone dict as listed by GET /repos/{owner}/{repo}/milestones.

    Args:
        number: Milestone number
        title: Milestone title (defaults to "3.3.{number}")
        state: open or closed
        due_on: ISO 8601 due instant, or None
        **overrides: Additional field overrides

    Returns:
        Dict suitable for GitHubMilestone.model_validate()
    """
    data = {
        "number": number,
        "title": title if title is not None else f"3.3.{number}",
        "state": state,
        "due_on": due_on,
        "open_issues": 0,
        "closed_issues": 12,
    }
    data.update(overrides)
    return data


# -----------------------------------------------------------------------------
# Schema Factories
# -----------------------------------------------------------------------------
def make_repository(name: str = "spring-boot", **kwargs: Any) -> GitHubRepository:
    """Create a GitHubRepository schema instance."""
    return GitHubRepository.model_validate(make_github_repository(name, **kwargs))


def make_release(
    project: str = "Spring Boot",
    name: str = "3.3.1",
    *,
    date: dt.date = JUN_20,
    status: ReleaseStatus = ReleaseStatus.OPEN,
    url: str | None = None,
    type: ReleaseType = ReleaseType.OSS,
) -> Release:
    """Create a Release with sensible defaults."""
    return Release(project=project, name=name, date=date, status=status, url=url, type=type)


# -----------------------------------------------------------------------------
# Fake GitHub API
# -----------------------------------------------------------------------------
class FakeGitHubApi:
    """In-memory GitHub REST API serving paginated, ETag-tagged lists.

    Lists are paginated with ``per_page`` and ``page`` query parameters and
    linked with ``rel="next"``. A page's ETag is derived from its body, so a
    request whose ``If-None-Match`` matches the current page gets a 304.

    Usage:
        api = FakeGitHubApi()
        api.set_repositories("spring-projects", [make_github_repository()])
        client = api.client()
    """

    def __init__(self, api_url: str = API_URL) -> None:
        self.api_url = api_url
        self.lists: dict[str, list[dict[str, Any]]] = {}
        self.requests: list[httpx.Request] = []
        self.rate_limited = False

    def set_repositories(self, organization: str, repositories: list[dict[str, Any]]) -> None:
        self.lists[f"/orgs/{organization}/repos"] = list(repositories)

    def set_milestones(self, full_name: str, milestones: list[dict[str, Any]]) -> None:
        self.lists[f"/repos/{full_name}/milestones"] = list(milestones)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def client(self) -> GitHubClient:
        """Create a GitHubClient talking to this fake."""
        return GitHubClient(
            "test-token",
            api_url=self.api_url,
            timeout=5.0,
            transport=self.transport,
        )

    def requests_to(self, path: str) -> list[httpx.Request]:
        """Requests made so far for a list path (any page)."""
        return [r for r in self.requests if r.url.path == path]

    def reset_requests(self) -> None:
        self.requests.clear()

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.rate_limited:
            return httpx.Response(
                403,
                json={"message": "API rate limit exceeded"},
                headers=make_rate_limit_headers(remaining=0, limit=60, reset_in_seconds=600),
            )
        headers = make_rate_limit_headers(remaining=4000)

        items = self.lists.get(request.url.path)
        if items is None:
            return httpx.Response(404, json={"message": "Not Found"}, headers=headers)

        per_page = int(request.url.params.get("per_page", "30"))
        page = int(request.url.params.get("page", "1"))
        start = (page - 1) * per_page
        body = json.dumps(items[start : start + per_page]).encode()
        etag = f'"{hashlib.sha1(body).hexdigest()}"'
        headers["etag"] = etag

        if request.headers.get("if-none-match") == etag:
            return httpx.Response(304, headers=headers)

        if start + per_page < len(items):
            next_url = request.url.copy_set_param("page", str(page + 1))
            headers["link"] = f'<{next_url}>; rel="next"'
        return httpx.Response(200, content=body, headers=headers)


def conditional(request: httpx.Request) -> bool:
    """Whether a request carried an If-None-Match precondition."""
    return "if-none-match" in request.headers


def full_page(count: int = PAGE_SIZE, **kwargs: Any) -> list[dict[str, Any]]:
    """Create ``count`` repositories named repo-0, repo-1, ..."""
    return [make_github_repository(f"repo-{i}", **kwargs) for i in range(count)]
