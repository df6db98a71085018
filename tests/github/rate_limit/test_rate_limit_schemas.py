"""Tests for parsing GitHub quota bodies and headers."""

import time
from datetime import UTC, datetime

import httpx
import pytest

from release_calendar.github.rate_limit.schemas import (
    PoolRateLimit,
    RateLimitPool,
    RateLimitSnapshot,
    parse_reset,
)
from tests.fixtures.rate_limit_responses import (
    HEADERS_EXHAUSTED,
    HEADERS_HEALTHY,
    HEADERS_PARTIAL,
    HEADERS_SEARCH_POOL,
    RATE_LIMIT_RESPONSE_EXHAUSTED,
    RATE_LIMIT_RESPONSE_HEALTHY,
    RATE_LIMIT_RESPONSE_MINIMAL,
    make_rate_limit_headers,
)


def core_of(snapshot: RateLimitSnapshot | None) -> PoolRateLimit:
    assert snapshot is not None
    core = snapshot.get_core()
    assert core is not None
    return core


@pytest.mark.parametrize(
    ("limit", "remaining", "percent", "exhausted"),
    [
        (5000, 1250, 25.0, False),
        (60, 0, 0.0, True),
        (0, 0, 0.0, True),
    ],
)
def test_pool_usage(limit: int, remaining: int, percent: float, exhausted: bool) -> None:
    pool = PoolRateLimit(
        pool=RateLimitPool.CORE,
        limit=limit,
        remaining=remaining,
        used=limit - remaining,
        reset_at=datetime.now(UTC),
    )

    assert pool.remaining_percent == percent
    assert pool.is_exhausted is exhausted


class TestFromApiResponse:
    def test_tracked_pools_only(self) -> None:
        snapshot = RateLimitSnapshot.from_api_response(RATE_LIMIT_RESPONSE_HEALTHY)

        assert list(snapshot.pools) == [
            RateLimitPool.CORE,
            RateLimitPool.SEARCH,
            RateLimitPool.GRAPHQL,
        ]
        assert snapshot.pools[RateLimitPool.SEARCH].limit == 30

    def test_core_values(self) -> None:
        core = core_of(RateLimitSnapshot.from_api_response(RATE_LIMIT_RESPONSE_HEALTHY))

        assert (core.limit, core.remaining, core.used) == (5000, 4500, 500)
        assert core.reset_at > datetime.now(UTC)

    def test_exhausted(self) -> None:
        snapshot = RateLimitSnapshot.from_api_response(RATE_LIMIT_RESPONSE_EXHAUSTED)

        assert all(pool.is_exhausted for pool in snapshot.pools.values())

    def test_core_only(self) -> None:
        snapshot = RateLimitSnapshot.from_api_response(RATE_LIMIT_RESPONSE_MINIMAL)

        assert list(snapshot.pools) == [RateLimitPool.CORE]

    def test_no_resources(self) -> None:
        snapshot = RateLimitSnapshot.from_api_response({})

        assert snapshot.pools == {}
        assert snapshot.get_core() is None


class TestFromResponseHeaders:
    def test_core_pool(self) -> None:
        core = core_of(RateLimitSnapshot.from_response_headers(HEADERS_HEALTHY))

        assert (core.limit, core.remaining, core.used) == (5000, 4500, 500)

    def test_exhausted(self) -> None:
        assert core_of(RateLimitSnapshot.from_response_headers(HEADERS_EXHAUSTED)).is_exhausted

    def test_resource_header_selects_pool(self) -> None:
        snapshot = RateLimitSnapshot.from_response_headers(HEADERS_SEARCH_POOL)

        assert snapshot is not None
        assert list(snapshot.pools) == [RateLimitPool.SEARCH]

    def test_untracked_resource_counts_as_core(self) -> None:
        headers = make_rate_limit_headers(remaining=7, resource="code_scanning_upload")

        assert core_of(RateLimitSnapshot.from_response_headers(headers)).remaining == 7

    def test_missing_headers_derived(self) -> None:
        """used is derived from limit and remaining; reset falls back to now."""
        before = datetime.now(UTC)

        core = core_of(RateLimitSnapshot.from_response_headers(HEADERS_PARTIAL))

        assert core.used == 4900
        assert core.reset_at >= before

    def test_case_insensitive_headers(self) -> None:
        headers = httpx.Headers({"X-RateLimit-Remaining": "12", "X-RateLimit-Limit": "60"})

        core = core_of(RateLimitSnapshot.from_response_headers(headers))

        assert (core.remaining, core.limit, core.used) == (12, 60, 48)

    def test_no_quota_headers(self) -> None:
        assert RateLimitSnapshot.from_response_headers({"etag": '"abc"'}) is None


@pytest.mark.parametrize("value", [None, "", "0", "-5", "soon"])
def test_parse_reset_rejects(value: str | None) -> None:
    assert parse_reset(value) is None


def test_parse_reset_epoch_seconds() -> None:
    reset = int(time.time()) + 60

    assert parse_reset(str(reset)) == datetime.fromtimestamp(reset, tz=UTC)
