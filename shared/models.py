"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class TokenPayload(BaseModel):
    """Claims we read from a Supabase access token."""

    sub: str = Field(..., min_length=1, description="User ID")
    email: Optional[EmailStr] = None
    email_confirmed_at: Optional[str] = None
    aud: Optional[str] = None
    role: Optional[str] = None
    exp: int
    iat: int

    model_config = {"extra": "ignore"}


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from JWT claims and made available
    to route handlers via dependency injection. Only ``id`` is used
    for data scoping; it is treated as an opaque string.
    """

    id: str = Field(..., min_length=1, description="User ID (opaque, from the auth provider)")
    email: Optional[EmailStr] = Field(None, description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")
    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
