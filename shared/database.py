"""
Supabase client for the modules store.

A single service-role client is shared by every repository. It bypasses
row level security, so ownership is enforced in the queries themselves:
every read and write filters on ``user_id``.
"""

import logging
from typing import Optional
from supabase import create_client, Client, ClientOptions

from .config import get_settings
from .exceptions import InternalError

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Return the shared service-role client, creating it on first use.

    Raises:
        InternalError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is unset
    """
    global _client

    if _client is not None:
        return _client

    settings = get_settings()
    missing = [
        name
        for name, value in (
            ("SUPABASE_URL", settings.supabase_url),
            ("SUPABASE_SERVICE_ROLE_KEY", settings.supabase_service_role_key),
        )
        if not value
    ]
    if missing:
        logger.error("Supabase not configured, missing %s", ", ".join(missing))
        raise InternalError(
            "Database not configured",
            details={"missing": missing},
        )

    _client = create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=ClientOptions(postgrest_client_timeout=settings.supabase_timeout),
    )
    return _client


def reset_client_cache() -> None:
    """Forget the cached client so the next call rebuilds it from settings."""
    global _client
    _client = None
