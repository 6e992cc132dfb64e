"""
Module API endpoints.

Provides REST endpoints for module CRUD, archive/recover and
last-visited tracking. Errors propagate as taxonomy exceptions and are
rendered by the app's exception handlers.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_module_service
from api.middleware.auth import get_current_user
from api.middleware.rate_limit import rate_limited
from api.models.errors import ERROR_RESPONSES
from shared.models import AuthenticatedUser

from .interfaces import IModuleService
from .models import (
    CreateModuleRequest,
    Module,
    ModuleListResponse,
    UpdateModuleRequest,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
)

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("", response_model=ModuleListResponse)
async def list_modules(
    limit: int = Query(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
    cursor: Optional[UUID] = Query(default=None, description="next_cursor from the previous page"),
    archived: Optional[bool] = Query(default=None, description="Filter by archived flag"),
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> ModuleListResponse:
    """
    List the current user's modules.

    Most recently visited first. Follow `next_cursor` to page through.
    """
    return await service.get_user_modules(
        user.id,
        limit=limit,
        cursor=str(cursor) if cursor else None,
        archived=archived,
    )


@router.get("/{module_id}", response_model=Module)
async def get_module(
    module_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """Get a single module."""
    return await service.get_by_id(str(module_id), user.id)


@router.post(
    "",
    response_model=Module,
    status_code=201,
    dependencies=[Depends(rate_limited("lenient"))],
)
async def create_module(
    request: CreateModuleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """Create a new module."""
    return await service.create(user.id, request)


@router.patch(
    "/{module_id}",
    response_model=Module,
    dependencies=[Depends(rate_limited("lenient"))],
)
async def update_module(
    module_id: UUID,
    request: UpdateModuleRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """
    Update module fields.

    Only fields present in the body are changed.
    """
    return await service.update(str(module_id), user.id, request)


@router.post(
    "/{module_id}/archive",
    response_model=Module,
    dependencies=[Depends(rate_limited("lenient"))],
)
async def archive_module(
    module_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """Archive a module."""
    return await service.archive(str(module_id), user.id)


@router.post(
    "/{module_id}/recover",
    response_model=Module,
    dependencies=[Depends(rate_limited("lenient"))],
)
async def recover_module(
    module_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """Restore an archived module."""
    return await service.recover(str(module_id), user.id)


@router.post(
    "/{module_id}/visit",
    response_model=Module,
    dependencies=[Depends(rate_limited("internal"))],
)
async def visit_module(
    module_id: UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IModuleService = Depends(get_module_service),
) -> Module:
    """Record that the user opened this module."""
    return await service.update_last_visited(str(module_id), user.id)
