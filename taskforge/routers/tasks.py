"""
Task management endpoints.

CRUD operations for tasks. Non-admin callers see the tasks they reported or
are assigned to.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import get_current_user, json_or_form, request_body
from taskforge.models.user import User
from taskforge.schemas.common import PaginationOptions
from taskforge.schemas.task import TaskCreateRequest, TaskPage, TaskResponse, TaskUpdateRequest
from taskforge.services.task_service import TaskService

router = APIRouter()


def get_task_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> TaskService:
    return TaskService(db=db)


# ---------------------------------------------------------------------------
# List Tasks
# ---------------------------------------------------------------------------

@router.post(
    "/pagination",
    response_model=TaskPage,
    summary="List tasks reported by or assigned to the caller",
    openapi_extra=request_body(PaginationOptions),
)
async def list_tasks(
    options: PaginationOptions = Depends(json_or_form(PaginationOptions)),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskPage:
    return await service.list_tasks(options, current_user)


# ---------------------------------------------------------------------------
# Get Task Detail
# ---------------------------------------------------------------------------

@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Get task detail",
)
async def get_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.get_task(task_id, current_user)


# ---------------------------------------------------------------------------
# Create Task
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new task",
    openapi_extra=request_body(TaskCreateRequest),
)
async def create_task(
    data: TaskCreateRequest = Depends(json_or_form(TaskCreateRequest)),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    """The caller is recorded as the reporter."""
    return await service.create_task(data, current_user)


# ---------------------------------------------------------------------------
# Update / Delete Task
# ---------------------------------------------------------------------------

@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Update, reassign or unarchive a task",
    openapi_extra=request_body(TaskUpdateRequest),
)
async def update_task(
    task_id: UUID,
    data: TaskUpdateRequest = Depends(json_or_form(TaskUpdateRequest)),
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.update_task(task_id, data, current_user)


@router.delete(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Archive (soft delete) a task",
)
async def delete_task(
    task_id: UUID,
    current_user: User = Depends(get_current_user),
    service: TaskService = Depends(get_task_service),
) -> TaskResponse:
    return await service.archive_task(task_id, current_user)
