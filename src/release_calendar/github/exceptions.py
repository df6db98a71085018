"""Errors raised by the GitHub client.

Any of these abandons the current poll of the GitHub source; the release
updater then publishes the GitHub schedules of the last successful poll.
"""

from datetime import datetime


class GitHubClientError(Exception):
    """A GitHub request failed or returned something unusable."""

    pass


class GitHubAuthenticationError(GitHubClientError):
    """The configured token was rejected (401)."""

    pass


class GitHubRetryableError(GitHubClientError):
    """A failure expected to clear up by a later poll."""

    pass


class GitHubRateLimitError(GitHubRetryableError):
    """The quota is used up (403 with ``x-ratelimit-remaining: 0``).

    ``reset_at`` is when GitHub replenishes the quota, if it said so.
    """

    def __init__(self, message: str, reset_at: datetime | None = None) -> None:
        super().__init__(message)
        self.reset_at = reset_at


class GitHubNotFoundError(GitHubClientError):
    """An organization or repository does not exist or is not visible (404)."""

    pass
