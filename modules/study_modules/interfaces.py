"""
Study modules interface.

The API layer depends on IModuleService for all module operations.
Every method takes the caller's user ID and only ever sees that user's modules.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import (
    Module,
    ModuleListResponse,
    CreateModuleRequest,
    UpdateModuleRequest,
)


@runtime_checkable
class IModuleService(Protocol):
    """
    Interface for module operations.

    A module is either active or archived; archive() and recover() are the
    only transitions between the two. Modules are never deleted.
    """

    async def get_by_id(self, module_id: str, user_id: str) -> Module:
        """
        Get a module owned by the caller.

        Raises:
            StudyModuleNotFoundError: If the module is absent or owned by another user
        """
        ...

    async def get_user_modules(
        self,
        user_id: str,
        limit: int = 20,
        cursor: Optional[str] = None,
        archived: Optional[bool] = None,
    ) -> ModuleListResponse:
        """
        List the caller's modules, most recently visited first.

        Args:
            user_id: User ID
            limit: Page size (1-100)
            cursor: ID of the last module of the previous page
            archived: Optional archived/active filter

        Returns:
            One page of modules plus the cursor for the next page, if any

        Raises:
            ValidationError: If limit is out of range or cursor is unknown
        """
        ...

    async def create(self, user_id: str, request: CreateModuleRequest) -> Module:
        """
        Create a module owned by the caller.

        All three timestamps are set to the same creation instant.
        """
        ...

    async def update(
        self,
        module_id: str,
        user_id: str,
        request: UpdateModuleRequest,
    ) -> Module:
        """
        Apply field changes and advance modified_at.

        Raises:
            StudyModuleNotFoundError: If the module is absent or owned by another user
        """
        ...

    async def archive(self, module_id: str, user_id: str) -> Module:
        """
        Mark a module archived. Idempotent.

        Raises:
            StudyModuleNotFoundError: If the module is absent or owned by another user
        """
        ...

    async def recover(self, module_id: str, user_id: str) -> Module:
        """
        Clear the archived flag. Idempotent.

        Raises:
            StudyModuleNotFoundError: If the module is absent or owned by another user
        """
        ...

    async def update_last_visited(self, module_id: str, user_id: str) -> Module:
        """
        Advance last_visited to now, driving recency ordering.

        Raises:
            StudyModuleNotFoundError: If the module is absent or owned by another user
        """
        ...
