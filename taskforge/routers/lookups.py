"""
Status and priority endpoints.

Both resources share one shape, so a single factory builds their routers.
Reads are open to any authenticated user; writes require an admin.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import get_current_user, json_or_form, request_body, require_admin
from taskforge.models.priority import Priority
from taskforge.models.status import Status
from taskforge.models.user import User
from taskforge.schemas.common import PaginationOptions
from taskforge.schemas.lookup import (
    LookupCreateRequest,
    LookupPage,
    LookupResponse,
    LookupUpdateRequest,
)
from taskforge.services.lookup_service import LookupService


def build_lookup_router(model: type[Status] | type[Priority], entity: str) -> APIRouter:
    """Return a router with list/get/create/update/delete for ``model``."""
    router = APIRouter()

    def get_service(
        db: AsyncSession = Depends(get_db, scope="function"),
    ) -> LookupService:
        return LookupService(db=db, model=model, entity=entity)

    @router.post(
        "/pagination",
        response_model=LookupPage,
        summary=f"List {entity} values",
        openapi_extra=request_body(PaginationOptions),
    )
    async def list_items(
        options: PaginationOptions = Depends(json_or_form(PaginationOptions)),
        current_user: User = Depends(get_current_user),
        service: LookupService = Depends(get_service),
    ) -> LookupPage:
        return await service.list_items(options)

    @router.get(
        "/{item_id}",
        response_model=LookupResponse,
        summary=f"Get a {entity}",
    )
    async def get_item(
        item_id: UUID,
        current_user: User = Depends(get_current_user),
        service: LookupService = Depends(get_service),
    ) -> LookupResponse:
        return await service.get_item(item_id)

    @router.post(
        "",
        response_model=LookupResponse,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create a {entity} (admin only)",
        openapi_extra=request_body(LookupCreateRequest),
    )
    async def create_item(
        data: LookupCreateRequest = Depends(json_or_form(LookupCreateRequest)),
        admin: User = Depends(require_admin),
        service: LookupService = Depends(get_service),
    ) -> LookupResponse:
        return await service.create_item(data)

    @router.patch(
        "/{item_id}",
        response_model=LookupResponse,
        summary=f"Rename a {entity} (admin only)",
        openapi_extra=request_body(LookupUpdateRequest),
    )
    async def update_item(
        item_id: UUID,
        data: LookupUpdateRequest = Depends(json_or_form(LookupUpdateRequest)),
        admin: User = Depends(require_admin),
        service: LookupService = Depends(get_service),
    ) -> LookupResponse:
        return await service.update_item(item_id, data)

    @router.delete(
        "/{item_id}",
        response_model=LookupResponse,
        summary=f"Delete a {entity} (admin only)",
    )
    async def delete_item(
        item_id: UUID,
        admin: User = Depends(require_admin),
        service: LookupService = Depends(get_service),
    ) -> LookupResponse:
        """Hard delete. Fails with 400 while any task still references it."""
        return await service.delete_item(item_id)

    return router


statuses_router = build_lookup_router(Status, "status")
priorities_router = build_lookup_router(Priority, "priority")
