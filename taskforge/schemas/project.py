from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskforge.schemas.common import CamelModel, Page, RequestModel


class ProjectCreateRequest(RequestModel):
    name: str = Field(min_length=1, max_length=32)
    company_id: UUID = Field(description="Company UUID the project belongs to")


class ProjectUpdateRequest(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=32)
    company_id: UUID | None = Field(default=None, description="Move project to another company")
    unarchive: bool = Field(default=False, description="Unarchive deleted project")


class ProjectResponse(CamelModel):
    id: UUID
    name: str
    company_id: UUID | None
    deleted_at: datetime | None
    updated_at: datetime
    created_at: datetime


ProjectPage = Page[ProjectResponse]
