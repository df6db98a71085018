"""Async GitHub API client using httpx.

This module provides conditional, lazily paginated access to the two
GitHub resources the release calendar needs: an organization's
repositories and a repository's milestones. Each call returns the first
page of a chain (see ``page.py``); passing the chain from the previous
poll back in lets unchanged pages be revalidated with ``If-None-Match``
rather than downloaded again.
"""

from __future__ import annotations

from functools import partial
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from release_calendar.config import get_settings
from release_calendar.logging import get_logger
from release_calendar.schemas.github_api import GitHubMilestone, GitHubRepository

from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
)
from .links import LinkParser, RegexLinkParser
from .page import Page
from .rate_limit.schemas import RateLimitSnapshot, parse_reset

logger = get_logger(__name__)

T = TypeVar("T")

PAGE_SIZE = 100
"""Items requested per page; a page holding fewer is the end of the data."""

API_VERSION = "2022-11-28"

_REPOSITORIES = TypeAdapter(list[GitHubRepository])
_MILESTONES = TypeAdapter(list[GitHubMilestone])


class GitHubClient:
    """Async GitHub API client for repository and milestone pages.

    Usage:
        async with GitHubClient() as client:
            page = await client.get_repositories("spring-projects", None)
            repositories = await collect_content(page)

    Later polls pass the previously returned page back in:
        page = await client.get_repositories("spring-projects", page)
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        api_url: str | None = None,
        timeout: float | None = None,
        link_parser: LinkParser | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the GitHub client.

        Args:
            token: GitHub PAT. If not provided, uses GITHUB_TOKEN from settings.
                   Without a token only public data is visible and the quota
                   is 60 requests per hour.
            api_url: Base URL of the REST API (defaults to settings)
            timeout: Per-request timeout in seconds (defaults to settings)
            link_parser: Parser for the Link header (defaults to RegexLinkParser)
            transport: Custom httpx transport (for testing)
        """
        settings = get_settings()
        self._token = token or settings.github_token
        if not self._token:
            logger.warning("No GitHub token configured; using unauthenticated access")
        self._api_url = (api_url or settings.github.api_url).rstrip("/")
        self._timeout = timeout or settings.github.timeout_seconds
        self._link_parser = link_parser or RegexLinkParser()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._rate_limit: RateLimitSnapshot | None = None

    @property
    def _http(self) -> httpx.AsyncClient:
        """Get or create the httpx client instance."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": API_VERSION,
            }
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                headers=headers,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    @property
    def api_url(self) -> str:
        return self._api_url

    @property
    def rate_limit(self) -> RateLimitSnapshot | None:
        """Quota reported by the most recent response (None before any request)."""
        return self._rate_limit

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> GitHubClient:
        """Async context manager entry."""
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        """Async context manager exit."""
        await self.close()

    # -------------------------------------------------------------------------
    # Rate Limit Info
    # -------------------------------------------------------------------------
    async def get_rate_limit(self) -> RateLimitSnapshot:
        """Fetch the quota of every tracked pool from GET /rate_limit."""
        url = f"{self._api_url}/rate_limit"
        response = await self._get(url, {})
        try:
            snapshot = RateLimitSnapshot.from_api_response(response.json())
        except (ValueError, KeyError) as e:
            raise GitHubClientError(f"Unexpected response body from {url}: {e}") from e
        if snapshot.get_core() is None:
            raise GitHubClientError("Rate limit response had no core pool")
        self._rate_limit = snapshot
        return snapshot

    # -------------------------------------------------------------------------
    # Paginated Resources
    # -------------------------------------------------------------------------
    async def get_repositories(
        self,
        organization: str,
        earlier_page: Page[GitHubRepository] | None,
    ) -> Page[GitHubRepository] | None:
        """Get the first page of an organization's repositories.

        Args:
            organization: Organization name
            earlier_page: First page of the chain returned by the previous
                          poll, or None

        Returns:
            First page of the repository chain

        Raises:
            GitHubRateLimitError: If the rate limit is exhausted
            GitHubClientError: On any other failure
        """
        url = (
            earlier_page.url
            if earlier_page is not None and earlier_page.url
            else f"{self._api_url}/orgs/{organization}/repos?per_page={PAGE_SIZE}"
        )
        return await self._fetch_page(url, earlier_page, _REPOSITORIES)

    async def get_milestones(
        self,
        repository: GitHubRepository,
        earlier_page: Page[GitHubMilestone] | None,
    ) -> Page[GitHubMilestone] | None:
        """Get the first page of a repository's milestones, open and closed.

        Args:
            repository: Repository whose milestones are listed
            earlier_page: First page of the chain returned by the previous
                          poll, or None

        Returns:
            First page of the milestone chain

        Raises:
            GitHubRateLimitError: If the rate limit is exhausted
            GitHubClientError: On any other failure
        """
        url = f"{repository.milestones_url}?state=all&per_page={PAGE_SIZE}"
        return await self._fetch_page(url, earlier_page, _MILESTONES)

    async def _fetch_page(
        self,
        url: str | None,
        earlier_page: Page[T] | None,
        adapter: TypeAdapter[list[T]],
    ) -> Page[T] | None:
        """Fetch one page, revalidating against ``earlier_page`` when safe.

        A 304 reuses the earlier page as-is and continues along the earlier
        chain, so the rest of the resumption is revalidated page by page in
        the same way.
        """
        if not url:
            return None

        headers: dict[str, str] = {}
        if earlier_page is not None and await self._can_revalidate(earlier_page):
            headers["If-None-Match"] = earlier_page.etag or ""

        response = await self._get(url, headers)

        if response.status_code == 304:
            if earlier_page is None:
                raise GitHubClientError(f"Unexpected 304 for unconditional request to {url}")
            logger.debug("Not modified: {}", url)
            earlier_next = await earlier_page.next()
            return Page(
                earlier_page.content,
                url,
                earlier_page.etag,
                partial(
                    self._fetch_page,
                    earlier_next.url if earlier_next is not None else None,
                    earlier_next,
                    adapter,
                ),
            )

        try:
            content = adapter.validate_json(response.content)
        except ValidationError as e:
            raise GitHubClientError(f"Unexpected response body from {url}: {e}") from e

        next_url = self._link_parser.parse(response.headers.get("link")).get("next")
        logger.debug("Fetched {} item(s) from {}", len(content), url)
        return Page(
            content,
            url,
            response.headers.get("etag"),
            partial(self._fetch_page, next_url, None, adapter),
        )

    @staticmethod
    async def _can_revalidate(earlier_page: Page[Any]) -> bool:
        """Whether the earlier page's ETag may be sent as a precondition.

        A page that filled completely and had no successor gives no
        evidence that nothing was appended after it, so it is re-fetched.
        """
        if earlier_page.etag is None:
            return False
        if len(earlier_page.content) != PAGE_SIZE:
            return True
        return await earlier_page.next() is not None

    async def _get(self, url: str, headers: dict[str, str]) -> httpx.Response:
        """Issue a GET and convert failures into client exceptions.

        Returns:
            Response with a 2xx or 304 status
        """
        try:
            response = await self._http.get(url, headers=headers)
        except httpx.HTTPError as e:
            raise GitHubClientError(f"Request to {url} failed: {e}") from e

        self._update_rate_limit_from_response(response)
        if response.status_code == 304 or response.is_success:
            return response
        raise self._handle_error(url, response)

    def _update_rate_limit_from_response(self, response: httpx.Response) -> None:
        """Remember the quota reported by a response's x-ratelimit-* headers."""
        snapshot = RateLimitSnapshot.from_response_headers(response.headers)
        if snapshot is not None:
            self._rate_limit = snapshot

    # -------------------------------------------------------------------------
    # Error Handling
    # -------------------------------------------------------------------------
    def _handle_error(self, url: str, response: httpx.Response) -> GitHubClientError:
        """Convert an error response to our custom exceptions."""
        status = response.status_code

        if status == 401:
            return GitHubAuthenticationError("Invalid GitHub token")
        elif status == 403:
            if response.headers.get("x-ratelimit-remaining") == "0":
                reset_at = parse_reset(response.headers.get("x-ratelimit-reset"))
                message = "GitHub rate limit exceeded"
                if reset_at is not None:
                    message += f". Limit will reset at {reset_at.isoformat()}"
                return GitHubRateLimitError(message, reset_at=reset_at)
            return GitHubClientError(f"Access forbidden: {url}")
        elif status == 404:
            return GitHubNotFoundError(f"Not found: {url}")
        else:
            return GitHubClientError(f"GitHub API error ({status}) for {url}")
