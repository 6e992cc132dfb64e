"""
Base repository class for database access.

Provides a common abstraction layer for all repositories, encapsulating
Supabase client access and translating store failures into the error
taxonomy.
"""

import logging
from typing import TypeVar, Generic, Any

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from .exceptions import ExternalServiceError, ValidationError


T = TypeVar("T")

logger = logging.getLogger(__name__)

# Postgres SQLSTATE for malformed input (e.g. "not-a-uuid" for a uuid column)
INVALID_TEXT_REPRESENTATION = "22P02"


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - _execute() to run a query and map store failures

    Subclasses should implement domain-specific data access methods
    and handle dict-to-Pydantic model mapping internally.

    Example:
        class ModuleRepository(BaseRepository[Module]):
            def get_by_id(self, module_id: str, user_id: str) -> Optional[Module]:
                query = self._db.table("modules").select("*").eq("id", module_id)
                result = self._execute(query.eq("user_id", user_id))
                ...
    """

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _execute(self, query: Any) -> Any:
        """
        Execute a PostgREST query builder.

        Raises:
            ValidationError: If the store rejected malformed input.
            ExternalServiceError: For any other store or transport failure.
        """
        try:
            return query.execute()
        except APIError as e:
            if e.code == INVALID_TEXT_REPRESENTATION:
                raise ValidationError(e.message or "Invalid input") from e
            logger.error("Database query failed: %s (code=%s)", e.message, e.code)
            raise ExternalServiceError(
                "Database request failed",
                service="database",
                details={"db_code": e.code},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Database unreachable: %s", e)
            raise ExternalServiceError("Database unavailable", service="database") from e
