"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter
from pydantic import BaseModel
from redis.exceptions import RedisError

from shared.cache import get_redis_client
from shared.config import get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    rate_limiter: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    The rate limiter fails open, so an unreachable Redis degrades
    the service rather than making it unready.
    """
    try:
        await get_redis_client().ping()
    except (RedisError, OSError) as e:
        logger.warning("Redis ping failed: %s", e)
        return ReadinessResponse(status="degraded", rate_limiter="unavailable")

    return ReadinessResponse(status="ready", rate_limiter="connected")
