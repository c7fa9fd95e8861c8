"""
Task schemas.

Request/response models for task CRUD and pagination.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskforge.schemas.common import CamelModel, Page, RequestModel


# ---------------------------------------------------------------------------
# Task Create
# ---------------------------------------------------------------------------

class TaskCreateRequest(RequestModel):
    """Request body for POST /tasks. The caller becomes the reporter."""

    name: str = Field(min_length=1, max_length=64)
    description: str = Field(min_length=1, max_length=1024)
    status_id: UUID
    priority_id: UUID
    assignee_id: UUID | None = None


# ---------------------------------------------------------------------------
# Task Update
# ---------------------------------------------------------------------------

class TaskUpdateRequest(RequestModel):
    """
    Request body for PATCH /tasks/{task_id}.

    Omitted fields are left untouched; an explicit null assigneeId unassigns.
    """

    name: str | None = Field(default=None, min_length=1, max_length=64)
    description: str | None = Field(default=None, min_length=1, max_length=1024)
    status_id: UUID | None = None
    priority_id: UUID | None = None
    assignee_id: UUID | None = None
    unarchive: bool = Field(default=False, description="Unarchive deleted task")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class TaskResponse(CamelModel):
    id: UUID
    name: str
    description: str
    status_id: UUID
    priority_id: UUID
    assignee_id: UUID | None
    reporter_id: UUID
    deleted_at: datetime | None
    updated_at: datetime
    created_at: datetime


TaskPage = Page[TaskResponse]
