"""
Task business logic.

Handles task CRUD and pagination. A non-admin user works only with the
tasks they reported or are assigned to.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import Select, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.exceptions import forbidden, not_found
from taskforge.models.priority import Priority
from taskforge.models.status import Status
from taskforge.models.task import Task
from taskforge.models.user import User
from taskforge.schemas.common import Page, PaginationOptions
from taskforge.schemas.task import TaskCreateRequest, TaskResponse, TaskUpdateRequest
from taskforge.services.pagination import apply_list_filters, paginate

logger = logging.getLogger(__name__)


class TaskService:
    """Handles all task operations."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Ownership
    # -----------------------------------------------------------------------

    @staticmethod
    def scope(stmt: Select, user: User) -> Select:
        if user.is_admin:
            return stmt
        return stmt.where(or_(Task.reporter_id == user.id, Task.assignee_id == user.id))

    @staticmethod
    def can_access(task: Task, user: User) -> bool:
        return user.is_admin or user.id in (task.reporter_id, task.assignee_id)

    async def _get_accessible(self, task_id: UUID, user: User, action: str) -> Task:
        task = await self.db.get(Task, task_id)
        if task is None:
            raise not_found("task")
        if not self.can_access(task, user):
            raise forbidden(f"User can't {action} task")
        return task

    # -----------------------------------------------------------------------
    # Reference checks
    # -----------------------------------------------------------------------

    async def _require_status(self, status_id: UUID) -> None:
        if await self.db.get(Status, status_id) is None:
            raise not_found("status")

    async def _require_priority(self, priority_id: UUID) -> None:
        if await self.db.get(Priority, priority_id) is None:
            raise not_found("priority")

    async def _require_user(self, user_id: UUID) -> None:
        user = await self.db.get(User, user_id)
        if user is None or user.deleted_at is not None:
            raise not_found("user")

    # -----------------------------------------------------------------------
    # List / Get
    # -----------------------------------------------------------------------

    async def list_tasks(self, options: PaginationOptions, user: User) -> Page[TaskResponse]:
        stmt = apply_list_filters(self.scope(select(Task), user), Task, options)
        return await paginate(self.db, stmt, options, TaskResponse, (Task.created_at, Task.id))

    async def get_task(self, task_id: UUID, user: User) -> TaskResponse:
        task = await self._get_accessible(task_id, user, "get")
        return TaskResponse.model_validate(task)

    # -----------------------------------------------------------------------
    # Create
    # -----------------------------------------------------------------------

    async def create_task(self, data: TaskCreateRequest, reporter: User) -> TaskResponse:
        """
        Create a task reported by ``reporter``.

        Status, priority and assignee must exist; a missing one is a 404.
        """
        await self._require_status(data.status_id)
        await self._require_priority(data.priority_id)
        if data.assignee_id is not None:
            await self._require_user(data.assignee_id)

        task = Task(
            name=data.name,
            description=data.description,
            status_id=data.status_id,
            priority_id=data.priority_id,
            assignee_id=data.assignee_id,
            reporter_id=reporter.id,
        )
        self.db.add(task)
        await self.db.flush()
        await self.db.refresh(task)
        logger.info("Task %s created by user %s", task.id, reporter.id)
        return TaskResponse.model_validate(task)

    # -----------------------------------------------------------------------
    # Update / Archive
    # -----------------------------------------------------------------------

    async def update_task(self, task_id: UUID, data: TaskUpdateRequest, user: User) -> TaskResponse:
        task = await self._get_accessible(task_id, user, "update")

        if data.name is not None:
            task.name = data.name
        if data.description is not None:
            task.description = data.description
        if data.status_id is not None:
            await self._require_status(data.status_id)
            task.status_id = data.status_id
        if data.priority_id is not None:
            await self._require_priority(data.priority_id)
            task.priority_id = data.priority_id
        if "assignee_id" in data.model_fields_set:
            if data.assignee_id is not None:
                await self._require_user(data.assignee_id)
            task.assignee_id = data.assignee_id
        if data.unarchive:
            task.deleted_at = None

        await self.db.flush()
        await self.db.refresh(task)
        return TaskResponse.model_validate(task)

    async def archive_task(self, task_id: UUID, user: User) -> TaskResponse:
        task = await self._get_accessible(task_id, user, "delete")
        task.deleted_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(task)
        return TaskResponse.model_validate(task)
