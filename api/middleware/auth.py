"""
Bearer token authentication.

Module routes are owner-scoped, so every one of them needs the caller's
user id. It comes from the ``sub`` claim of a Supabase-issued HS256 JWT and
is treated as an opaque string.
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from shared.config import get_settings
from shared.exceptions import InternalError, UnauthorizedError
from shared.models import AuthenticatedUser, TokenPayload

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
JWT_AUDIENCE = "authenticated"

# auto_error=False so a missing header goes through our error taxonomy
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> TokenPayload:
    """
    Verify a Supabase access token and return its claims.

    Raises:
        UnauthorizedError: Bad signature, wrong audience, expired, or no subject
        InternalError: SUPABASE_JWT_SECRET is not configured
    """
    secret = get_settings().supabase_jwt_secret
    if not secret:
        raise InternalError("Server authentication not configured")

    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], audience=JWT_AUDIENCE)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except JWTError as e:
        logger.debug("Rejected bearer token: %s", e)
        raise UnauthorizedError(f"Invalid token: {e}")

    try:
        return TokenPayload(**claims)
    except PydanticValidationError:
        raise UnauthorizedError("Invalid token: missing required claims")


def get_user_from_payload(payload: TokenPayload) -> AuthenticatedUser:
    """Build the request user from verified claims."""
    return AuthenticatedUser(
        id=payload.sub,
        email=payload.email,
        email_verified=bool(payload.email_confirmed_at),
        last_sign_in=datetime.fromtimestamp(payload.iat, tz=timezone.utc),
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> AuthenticatedUser:
    """FastAPI dependency resolving the authenticated caller or raising 401."""
    if credentials is None:
        raise UnauthorizedError("Missing authorization header")
    return get_user_from_payload(decode_token(credentials.credentials))
