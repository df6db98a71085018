"""Async Jira REST API client using httpx."""

from __future__ import annotations

from typing import TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from release_calendar.logging import get_logger

from .schemas import JiraProject, JiraVersion

logger = get_logger(__name__)

T = TypeVar("T")

_PROJECTS = TypeAdapter(list[JiraProject])
_VERSIONS = TypeAdapter(list[JiraVersion])


class JiraClientError(Exception):
    """Raised when a Jira request fails or returns an unexpected body."""

    pass


class JiraClient:
    """Async client for the project and version endpoints of Jira.

    Usage:
        async with JiraClient("https://jira.spring.io") as client:
            for project in await client.get_projects():
                versions = await client.get_versions(project)
    """

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Jira client.

        Args:
            url: Base URL of the Jira instance
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (for testing)
        """
        self._url = url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        return self._url

    @property
    def _http(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> JiraClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def get_projects(self) -> list[JiraProject]:
        """List every project visible to the client.

        Raises:
            JiraClientError: If the request fails
        """
        return await self._get_list(f"{self._url}/rest/api/2/project", _PROJECTS)

    async def get_versions(self, project: JiraProject) -> list[JiraVersion]:
        """List a project's versions.

        Raises:
            JiraClientError: If the request fails
        """
        return await self._get_list(f"{project.self_url}/versions", _VERSIONS)

    async def _get_list(self, url: str, adapter: TypeAdapter[list[T]]) -> list[T]:
        try:
            response = await self._http.get(url)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise JiraClientError(
                f"Jira API error ({e.response.status_code}) for {url}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            raise JiraClientError(f"Request to {url} failed: {e}") from e
        try:
            items = adapter.validate_python(data)
        except ValidationError as e:
            raise JiraClientError(f"Unexpected response body from {url}: {e}") from e
        logger.debug("Fetched {} item(s) from {}", len(items), url)
        return items
