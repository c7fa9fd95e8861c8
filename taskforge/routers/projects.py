"""
Project management endpoints.

CRUD operations for projects. Access follows ownership of the project's company.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import get_current_user, json_or_form, request_body
from taskforge.models.user import User
from taskforge.schemas.common import PaginationOptions
from taskforge.schemas.project import (
    ProjectCreateRequest,
    ProjectPage,
    ProjectResponse,
    ProjectUpdateRequest,
)
from taskforge.services.project_service import ProjectService

router = APIRouter()


def get_project_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> ProjectService:
    return ProjectService(db=db)


@router.post(
    "/pagination",
    response_model=ProjectPage,
    summary="List projects visible to the caller",
    openapi_extra=request_body(PaginationOptions),
)
async def list_projects(
    options: PaginationOptions = Depends(json_or_form(PaginationOptions)),
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ProjectPage:
    return await service.list_projects(options, current_user)


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project detail",
)
async def get_project(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return await service.get_project(project_id, current_user)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new project",
    openapi_extra=request_body(ProjectCreateRequest),
)
async def create_project(
    data: ProjectCreateRequest = Depends(json_or_form(ProjectCreateRequest)),
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    """
    Create a project in a company.

    Non-admin callers must own the target company.
    """
    return await service.create_project(data, current_user)


@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update, move or unarchive a project",
    openapi_extra=request_body(ProjectUpdateRequest),
)
async def update_project(
    project_id: UUID,
    data: ProjectUpdateRequest = Depends(json_or_form(ProjectUpdateRequest)),
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return await service.update_project(project_id, data, current_user)


@router.delete(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Archive (soft delete) a project",
)
async def delete_project(
    project_id: UUID,
    current_user: User = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service),
) -> ProjectResponse:
    return await service.archive_project(project_id, current_user)
