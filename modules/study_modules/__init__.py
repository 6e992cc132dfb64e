"""
Study modules.

Handles user-owned course/subject containers: CRUD, archive/recover,
recency tracking and cursor-paginated listing.

Public API:
- IModuleService: Interface for module operations
- Module: A stored module
- CreateModuleRequest / UpdateModuleRequest: Write payloads
- ModuleListResponse: One page of modules
"""

from .interfaces import IModuleService
from .models import (
    Module,
    CreateModuleRequest,
    UpdateModuleRequest,
    ModuleListResponse,
    DEFAULT_TOKEN,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)
from .exceptions import StudyModuleNotFoundError, InvalidCursorError

__all__ = [
    # Interface
    "IModuleService",
    # Models
    "Module",
    "CreateModuleRequest",
    "UpdateModuleRequest",
    "ModuleListResponse",
    "DEFAULT_TOKEN",
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    # Exceptions
    "StudyModuleNotFoundError",
    "InvalidCursorError",
]
