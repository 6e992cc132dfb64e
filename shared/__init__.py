"""
Shared infrastructure for the Noodle backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- cache: Redis client factory
- rate_limit: Fixed-window rate limiter
- exceptions: Error taxonomy

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_client, reset_client_cache
from .cache import get_redis_client, reset_redis_client
from .exceptions import (
    ErrorKind,
    status_for,
    NoodleError,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    ValidationError,
    ConflictError,
    RateLimitError,
    InternalError,
    ExternalServiceError,
)
from .models import AuthenticatedUser
from .rate_limit import (
    RATE_LIMIT_PRESETS,
    RateLimitPreset,
    RateLimitResult,
    RedisRateLimiter,
    rate_limit,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_client",
    "reset_client_cache",
    "get_redis_client",
    "reset_redis_client",
    "ErrorKind",
    "status_for",
    "NoodleError",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "ValidationError",
    "ConflictError",
    "RateLimitError",
    "InternalError",
    "ExternalServiceError",
    "AuthenticatedUser",
    "RATE_LIMIT_PRESETS",
    "RateLimitPreset",
    "RateLimitResult",
    "RedisRateLimiter",
    "rate_limit",
]
