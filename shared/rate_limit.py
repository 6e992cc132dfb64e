"""
Fixed-window rate limiting backed by Redis.

Each identifier gets a counter at ``rate_limit:<identifier>``. The first
increment in a window arms the key's expiry; when the key expires the next
request starts a fresh window.

INCR and EXPIRE are issued as separate commands, so two first requests
racing inside the same window may each set an expiry. Limits are therefore
approximate, which is acceptable for abuse protection.

If Redis is unreachable the limiter fails open: the request is allowed and
the failure is logged.
"""

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

from .exceptions import ValidationError

logger = logging.getLogger(__name__)

KEY_PREFIX = "rate_limit:"

# Redis TTL sentinels
_TTL_NO_EXPIRY = -1
_TTL_MISSING = -2


@dataclass(frozen=True)
class RateLimitResult:
    """
    Outcome of a single rate limit check.

    Attributes:
        allowed: Whether the request may proceed.
        remaining: Requests left in the current window (0 when blocked).
        reset_at_ms: UNIX epoch milliseconds when the window resets.
        limit: Max requests per window.
    """

    allowed: bool
    remaining: int
    reset_at_ms: int
    limit: int

    def retry_after_seconds(self, now_ms: int) -> int:
        """Whole seconds until the window resets, never negative."""
        return max(0, math.ceil((self.reset_at_ms - now_ms) / 1000))


@dataclass(frozen=True)
class RateLimitPreset:
    """A named pairing of request limit and window size in seconds."""

    limit: int
    window: int


RATE_LIMIT_PRESETS: dict[str, RateLimitPreset] = {
    # Sensitive operations
    "strict": RateLimitPreset(limit=3, window=3600),
    # Public endpoints
    "standard": RateLimitPreset(limit=10, window=60),
    # Authenticated users
    "lenient": RateLimitPreset(limit=30, window=60),
    # Internal operations
    "internal": RateLimitPreset(limit=100, window=60),
}


def get_preset(name: str) -> RateLimitPreset:
    """Look up a preset by name. Raises KeyError for unknown names."""
    return RATE_LIMIT_PRESETS[name]


def build_key(identifier: str) -> str:
    return f"{KEY_PREFIX}{identifier}"


class RedisRateLimiter:
    """
    Fixed-window rate limiter using Redis counters.

    The limiter holds no local state; all counting happens in Redis, so
    every worker process shares the same budget per identifier.
    """

    def __init__(
        self,
        client: Redis,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """
        Initialize the limiter.

        Args:
            client: Async Redis client.
            clock: Time source returning UNIX time in seconds.
        """
        self._redis = client
        self._clock = clock

    def _now_ms(self) -> int:
        return int(self._clock() * 1000)

    async def hit(
        self,
        identifier: str,
        limit: int = 5,
        window: int = 60,
    ) -> RateLimitResult:
        """
        Count one request for ``identifier`` and report whether it is allowed.

        Args:
            identifier: Caller identity (user ID, IP address, email, ...).
            limit: Maximum number of requests allowed in the window.
            window: Window length in seconds.

        Returns:
            RateLimitResult for this request.

        Raises:
            ValidationError: If limit or window is not positive.
        """
        if limit < 1:
            raise ValidationError("limit must be >= 1", fields={"limit": "must be >= 1"})
        if window < 1:
            raise ValidationError("window must be >= 1", fields={"window": "must be >= 1"})

        key = build_key(identifier)

        try:
            count = await self._redis.incr(key)
            if count == 1:
                await self._redis.expire(key, window)

            ttl = await self._redis.ttl(key)
            if ttl == _TTL_NO_EXPIRY:
                # A previous EXPIRE was lost; re-arm so the counter cannot stick.
                await self._redis.expire(key, window)
                ttl = window
            elif ttl == _TTL_MISSING:
                ttl = window
        except (RedisError, OSError) as e:
            logger.warning(
                "Rate limit store unavailable, allowing request for %s: %s",
                identifier,
                e,
            )
            return RateLimitResult(
                allowed=True,
                remaining=limit,
                reset_at_ms=self._now_ms() + window * 1000,
                limit=limit,
            )

        return RateLimitResult(
            allowed=count <= limit,
            remaining=max(0, limit - count),
            reset_at_ms=self._now_ms() + ttl * 1000,
            limit=limit,
        )

    async def hit_preset(self, identifier: str, preset: str) -> RateLimitResult:
        """Count one request against a named preset."""
        config = get_preset(preset)
        return await self.hit(identifier, limit=config.limit, window=config.window)


# Module-level instance getter
_limiter_instance: Optional[RedisRateLimiter] = None


def get_rate_limiter() -> RedisRateLimiter:
    """Get the rate limiter singleton backed by the shared Redis client."""
    global _limiter_instance
    if _limiter_instance is None:
        from .cache import get_redis_client
        _limiter_instance = RedisRateLimiter(get_redis_client())
    return _limiter_instance


def reset_rate_limiter() -> None:
    """Reset the rate limiter singleton (for testing)."""
    global _limiter_instance
    _limiter_instance = None


async def rate_limit(
    identifier: str,
    limit: int = 5,
    window: int = 60,
) -> RateLimitResult:
    """Rate limit a request using the process-wide limiter."""
    return await get_rate_limiter().hit(identifier, limit=limit, window=window)
