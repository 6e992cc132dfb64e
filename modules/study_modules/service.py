"""
Study modules service implementation.

Implements IModuleService on top of ModuleRepository. The service owns
the business rules: defaults on create, forward-only timestamps, cursor
resolution for pagination, and turning "no owned row" into a not-found error.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from shared.exceptions import ValidationError

from .interfaces import IModuleService
from .models import (
    Module,
    ModuleListResponse,
    CreateModuleRequest,
    UpdateModuleRequest,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from .exceptions import StudyModuleNotFoundError, InvalidCursorError
from .repository import ModuleRepository

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ModuleService(IModuleService):
    """
    Module service backed by a ModuleRepository.

    No transactions are used: update() checks existence and then writes,
    so a concurrent archive can interleave. Archive and update touch
    disjoint columns.
    """

    def __init__(
        self,
        repository: ModuleRepository,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repo = repository
        self._clock = clock

    async def get_by_id(self, module_id: str, user_id: str) -> Module:
        """Get a module owned by the caller."""
        module = self._repo.get_by_id(module_id, user_id)
        if module is None:
            raise StudyModuleNotFoundError(module_id)
        return module

    async def get_user_modules(
        self,
        user_id: str,
        limit: int = DEFAULT_PAGE_SIZE,
        cursor: Optional[str] = None,
        archived: Optional[bool] = None,
    ) -> ModuleListResponse:
        """List the caller's modules using keyset pagination."""
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}",
                fields={"limit": f"must be between 1 and {MAX_PAGE_SIZE}"},
            )

        anchor: Optional[Module] = None
        if cursor:
            anchor = self._repo.get_by_id(cursor, user_id)
            if anchor is None:
                raise InvalidCursorError(cursor)

        # One extra row tells us whether another page exists
        rows = self._repo.list_for_user(
            user_id,
            limit=limit + 1,
            after=anchor,
            archived=archived,
        )

        has_more = len(rows) > limit
        items = rows[:limit]

        return ModuleListResponse(
            items=items,
            next_cursor=items[-1].id if has_more and items else None,
        )

    async def create(self, user_id: str, request: CreateModuleRequest) -> Module:
        """Create a module owned by the caller."""
        if not user_id:
            raise ValidationError("user_id must not be empty", fields={"user_id": "required"})

        now = self._clock().isoformat()
        data = {
            "user_id": user_id,
            "name": request.name,
            "description": request.description or "",
            "code": request.code,
            "icon": request.icon,
            "color": request.color,
            "credits": request.credits,
            "archived": False,
            "created_at": now,
            "modified_at": now,
            "last_visited": now,
        }

        module = self._repo.insert(data)
        logger.info("Created module %s for user %s", module.id, user_id)
        return module

    async def update(
        self,
        module_id: str,
        user_id: str,
        request: UpdateModuleRequest,
    ) -> Module:
        """Apply field changes and advance modified_at."""
        existing = await self.get_by_id(module_id, user_id)

        data = request.changes()
        data["modified_at"] = max(self._clock(), existing.modified_at).isoformat()

        return self._update_owned(module_id, user_id, data)

    async def archive(self, module_id: str, user_id: str) -> Module:
        """Mark a module archived."""
        return self._update_owned(module_id, user_id, {"archived": True})

    async def recover(self, module_id: str, user_id: str) -> Module:
        """Clear the archived flag."""
        return self._update_owned(module_id, user_id, {"archived": False})

    async def update_last_visited(self, module_id: str, user_id: str) -> Module:
        """Advance last_visited to now."""
        existing = await self.get_by_id(module_id, user_id)
        visited = max(self._clock(), existing.last_visited)
        return self._update_owned(module_id, user_id, {"last_visited": visited.isoformat()})

    def _update_owned(self, module_id: str, user_id: str, data: dict) -> Module:
        """Run a scoped update; zero affected rows means not found."""
        module = self._repo.update(module_id, user_id, data)
        if module is None:
            raise StudyModuleNotFoundError(module_id)
        return module
