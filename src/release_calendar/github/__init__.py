"""Release schedules from GitHub repository milestones.

- GitHubClient: Async GitHub API client with conditional pagination
- Page chains: Page, iter_pages, collect_content
- Project classification: Project
- GitHubReleaseScheduleSource: Release schedules from repository milestones
"""

from .client import PAGE_SIZE, GitHubClient
from .exceptions import (
    GitHubAuthenticationError,
    GitHubClientError,
    GitHubNotFoundError,
    GitHubRateLimitError,
    GitHubRetryableError,
)
from .links import LinkParser, RegexLinkParser
from .page import Page, collect_content, iter_pages
from .project import COMMERCIAL_SUFFIX, Project
from .rate_limit import PoolRateLimit, RateLimitPool, RateLimitSnapshot
from .source import GitHubReleaseScheduleSource

__all__ = [
    # Client
    "GitHubClient",
    "PAGE_SIZE",
    # Exceptions
    "GitHubAuthenticationError",
    "GitHubClientError",
    "GitHubNotFoundError",
    "GitHubRateLimitError",
    "GitHubRetryableError",
    # Pagination
    "LinkParser",
    "Page",
    "RegexLinkParser",
    "collect_content",
    "iter_pages",
    # Projects
    "COMMERCIAL_SUFFIX",
    "Project",
    "GitHubReleaseScheduleSource",
    # Rate limits
    "PoolRateLimit",
    "RateLimitPool",
    "RateLimitSnapshot",
]
