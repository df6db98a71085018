"""Rate limit tracking for GitHub API responses."""

from .schemas import PoolRateLimit, RateLimitPool, RateLimitSnapshot, parse_reset

__all__ = [
    "PoolRateLimit",
    "RateLimitPool",
    "RateLimitSnapshot",
    "parse_reset",
]
