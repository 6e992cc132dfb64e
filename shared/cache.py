"""
Key-value store client factory for Redis.

Only the rate limiter uses Redis today. The client is created lazily and
shared by every request in the process.
"""

from typing import Optional
from redis.asyncio import Redis

from .config import get_settings

_redis_client: Optional[Redis] = None


def get_redis_client() -> Redis:
    """
    Get the process-wide async Redis client.

    Creating the client does not open a connection; the first command does.
    """
    global _redis_client

    if _redis_client is None:
        settings = get_settings()
        _redis_client = Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=settings.redis_socket_timeout,
            socket_connect_timeout=settings.redis_socket_timeout,
        )

    return _redis_client


async def close_redis_client() -> None:
    """Close the cached client, if any, and forget it."""
    global _redis_client
    if _redis_client is not None:
        await _redis_client.aclose()
    _redis_client = None


def reset_redis_client() -> None:
    """Forget the cached client without closing it (for testing)."""
    global _redis_client
    _redis_client = None
