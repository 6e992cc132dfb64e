"""
Fixtures shared by the whole test suite.

Tokens are signed with TEST_JWT_SECRET; tests that exercise real token
verification patch ``api.middleware.auth.get_settings`` to return it.
"""

import pytest
from datetime import datetime, timedelta, timezone
from jose import jwt

from api.dependencies import reset_container
from shared.cache import reset_redis_client
from shared.database import reset_client_cache
from shared.rate_limit import reset_rate_limiter


TEST_JWT_SECRET = "noodle-test-jwt-secret"
TEST_USER_ID = "test-user-123"
TEST_USER_EMAIL = "student@example.com"


def create_test_token(
    user_id: str = TEST_USER_ID,
    email: str = TEST_USER_EMAIL,
    expired: bool = False,
    email_verified: bool = True,
    audience: str = "authenticated",
) -> str:
    """Sign a Supabase-shaped access token valid (or expired) by one hour."""
    issued = datetime.now(timezone.utc)
    lifetime = timedelta(hours=-1 if expired else 1)
    claims = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": issued.isoformat() if email_verified else None,
        "aud": audience,
        "role": "authenticated",
        "iat": int(issued.timestamp()),
        "exp": int((issued + lifetime).timestamp()),
    }
    return jwt.encode(claims, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Drop cached clients, limiter and service container around each test."""
    resets = (reset_container, reset_rate_limiter, reset_redis_client, reset_client_cache)
    for reset in resets:
        reset()
    yield
    for reset in resets:
        reset()


@pytest.fixture
def test_user_id() -> str:
    return TEST_USER_ID


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Bearer header for TEST_USER_ID."""
    return {"Authorization": f"Bearer {create_test_token()}"}
