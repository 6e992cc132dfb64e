"""
Rate limiting dependency for FastAPI routes.

Routes opt in by depending on ``rate_limited("<preset>")``. The budget is
tracked per preset and per authenticated user, so hitting the limit on
writes does not affect reads.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import Depends

from shared.config import get_settings
from shared.exceptions import RateLimitError
from shared.models import AuthenticatedUser
from shared.rate_limit import RateLimitResult, RedisRateLimiter, get_preset

from ..dependencies import get_rate_limiter
from .auth import get_current_user

logger = logging.getLogger(__name__)


def rate_limited(preset: str) -> Callable:
    """
    Build a dependency enforcing a named rate limit preset.

    Args:
        preset: Name from RATE_LIMIT_PRESETS (e.g., "lenient").

    Raises:
        KeyError: If the preset name is unknown (at route definition time).
    """
    get_preset(preset)

    async def enforce_rate_limit(
        user: AuthenticatedUser = Depends(get_current_user),
        limiter: RedisRateLimiter = Depends(get_rate_limiter),
    ) -> Optional[RateLimitResult]:
        if not get_settings().rate_limit_enabled:
            return None

        result = await limiter.hit_preset(f"{preset}:{user.id}", preset)
        if result.allowed:
            return result

        retry_after = result.retry_after_seconds(int(time.time() * 1000))
        logger.info(
            "Rate limit exceeded for user %s (preset=%s, retry_after=%ss)",
            user.id,
            preset,
            retry_after,
        )
        raise RateLimitError(retry_after=retry_after)

    return enforce_rate_limit
