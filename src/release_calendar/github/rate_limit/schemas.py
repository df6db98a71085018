"""GitHub API quota, as reported by GET /rate_limit and x-ratelimit-* headers.

See: https://docs.github.com/en/rest/rate-limit/rate-limit
"""

from collections.abc import Mapping
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, computed_field


class RateLimitPool(StrEnum):
    """Quota pools tracked by the client.

    Listing repositories and milestones draws on ``core``; the other pools
    are only shown by ``release-calendar github rate-limit``.
    """

    CORE = "core"
    SEARCH = "search"
    GRAPHQL = "graphql"


def parse_reset(value: str | None) -> datetime | None:
    """Convert an ``x-ratelimit-reset`` value (epoch seconds) to UTC."""
    if not value:
        return None
    try:
        timestamp = int(value)
    except ValueError:
        return None
    if timestamp <= 0:
        return None
    return datetime.fromtimestamp(timestamp, tz=UTC)


class PoolRateLimit(BaseModel):
    """Quota of one pool within the current window."""

    pool: RateLimitPool
    limit: int = Field(ge=0)
    remaining: int = Field(ge=0)
    used: int = Field(ge=0)
    reset_at: datetime = Field(description="When the window resets (UTC)")

    @classmethod
    def from_resource(cls, pool: RateLimitPool, resource: Mapping[str, Any]) -> Self:
        """Build from one entry of the ``resources`` object of /rate_limit."""
        return cls(
            pool=pool,
            limit=resource["limit"],
            remaining=resource["remaining"],
            used=resource["used"],
            reset_at=datetime.fromtimestamp(resource["reset"], tz=UTC),
        )

    @classmethod
    def from_headers(cls, pool: RateLimitPool, headers: Mapping[str, str]) -> Self:
        """Build from x-ratelimit-* headers, filling in whatever is missing."""
        remaining = int(headers["x-ratelimit-remaining"])
        limit = int(headers.get("x-ratelimit-limit", str(remaining)))
        used = int(headers.get("x-ratelimit-used", str(max(limit - remaining, 0))))
        return cls(
            pool=pool,
            limit=limit,
            remaining=remaining,
            used=used,
            reset_at=parse_reset(headers.get("x-ratelimit-reset")) or datetime.now(UTC),
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_percent(self) -> float:
        """Share of the limit still available, from 0.0 to 100.0."""
        return self.remaining / self.limit * 100 if self.limit else 0.0

    @property
    def is_exhausted(self) -> bool:
        return self.remaining == 0


class RateLimitSnapshot(BaseModel):
    """Quota of every known pool at one point in time."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    pools: dict[RateLimitPool, PoolRateLimit] = Field(default_factory=dict)

    @classmethod
    def from_api_response(cls, data: Mapping[str, Any]) -> Self:
        """Parse the body of GET /rate_limit.

        Pools the client does not know about are ignored.
        """
        resources = data.get("resources", {})
        return cls(
            pools={
                pool: PoolRateLimit.from_resource(pool, resources[pool.value])
                for pool in RateLimitPool
                if pool.value in resources
            }
        )

    @classmethod
    def from_response_headers(
        cls,
        headers: Mapping[str, str],
        default_pool: RateLimitPool = RateLimitPool.CORE,
    ) -> Self | None:
        """Parse the quota headers GitHub attaches to every API response.

        Args:
            headers: Response headers, looked up by lower-case name
            default_pool: Pool assumed when x-ratelimit-resource is absent
                          or names a pool the client does not track

        Returns:
            Snapshot of the single pool the request drew on, or None if the
            response carried no quota headers
        """
        if "x-ratelimit-remaining" not in headers:
            return None
        try:
            pool = RateLimitPool(headers.get("x-ratelimit-resource", default_pool))
        except ValueError:
            pool = default_pool
        return cls(pools={pool: PoolRateLimit.from_headers(pool, headers)})

    def get_core(self) -> PoolRateLimit | None:
        return self.pools.get(RateLimitPool.CORE)
