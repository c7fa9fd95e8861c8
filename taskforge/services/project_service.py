"""
Project business logic.

A project is visible to the owner of its company; admins see everything.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.exceptions import forbidden, not_found
from taskforge.models.company import Company
from taskforge.models.project import Project
from taskforge.models.user import User
from taskforge.schemas.common import Page, PaginationOptions
from taskforge.schemas.project import (
    ProjectCreateRequest,
    ProjectResponse,
    ProjectUpdateRequest,
)
from taskforge.services.pagination import apply_list_filters, paginate

logger = logging.getLogger(__name__)


class ProjectService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    @staticmethod
    def scope(stmt: Select, user: User) -> Select:
        if user.is_admin:
            return stmt
        return stmt.join(Company, Project.company_id == Company.id).where(
            Company.owner_id == user.id
        )

    async def _owns_company(self, company_id: UUID | None, user: User) -> bool:
        if company_id is None:
            return False
        result = await self.db.execute(
            select(Company.id).where(Company.id == company_id, Company.owner_id == user.id)
        )
        return result.scalar_one_or_none() is not None

    async def _get_accessible(self, project_id: UUID, user: User, action: str) -> Project:
        project = await self.db.get(Project, project_id)
        if project is None:
            raise not_found("project")
        if not user.is_admin and not await self._owns_company(project.company_id, user):
            raise forbidden(f"User can't {action} project")
        return project

    async def _require_company(self, company_id: UUID, user: User) -> Company:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise not_found("company")
        if not user.is_admin and company.owner_id != user.id:
            raise forbidden("User can't create project for company")
        return company

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    async def list_projects(self, options: PaginationOptions, user: User) -> Page[ProjectResponse]:
        stmt = apply_list_filters(self.scope(select(Project), user), Project, options)
        return await paginate(
            self.db, stmt, options, ProjectResponse, (Project.created_at, Project.id)
        )

    async def get_project(self, project_id: UUID, user: User) -> ProjectResponse:
        project = await self._get_accessible(project_id, user, "get")
        return ProjectResponse.model_validate(project)

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    async def create_project(self, data: ProjectCreateRequest, user: User) -> ProjectResponse:
        company = await self._require_company(data.company_id, user)
        project = Project(name=data.name, company_id=company.id)
        self.db.add(project)
        await self.db.flush()
        await self.db.refresh(project)
        logger.info("Project %s created in company %s", project.id, company.id)
        return ProjectResponse.model_validate(project)

    async def update_project(
        self, project_id: UUID, data: ProjectUpdateRequest, user: User
    ) -> ProjectResponse:
        project = await self._get_accessible(project_id, user, "update")

        if data.name is not None:
            project.name = data.name
        if data.company_id is not None and data.company_id != project.company_id:
            company = await self._require_company(data.company_id, user)
            project.company_id = company.id
        if data.unarchive:
            project.deleted_at = None

        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)

    async def archive_project(self, project_id: UUID, user: User) -> ProjectResponse:
        project = await self._get_accessible(project_id, user, "delete")
        project.deleted_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(project)
        return ProjectResponse.model_validate(project)
