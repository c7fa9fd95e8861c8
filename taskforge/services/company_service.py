"""
Company business logic.

Non-admin users only see and modify the companies they own.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.exceptions import forbidden, not_found
from taskforge.models.company import Company
from taskforge.models.user import User
from taskforge.schemas.common import Page, PaginationOptions
from taskforge.schemas.company import (
    CompanyCreateRequest,
    CompanyResponse,
    CompanyUpdateRequest,
)
from taskforge.services.pagination import apply_list_filters, paginate

logger = logging.getLogger(__name__)


class CompanyService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    # -----------------------------------------------------------------------
    # Ownership
    # -----------------------------------------------------------------------

    @staticmethod
    def scope(stmt: Select, user: User) -> Select:
        if user.is_admin:
            return stmt
        return stmt.where(Company.owner_id == user.id)

    @staticmethod
    def can_access(company: Company, user: User) -> bool:
        return user.is_admin or company.owner_id == user.id

    async def _get_accessible(self, company_id: UUID, user: User, action: str) -> Company:
        company = await self.db.get(Company, company_id)
        if company is None:
            raise not_found("company")
        if not self.can_access(company, user):
            raise forbidden(f"User can't {action} company")
        return company

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    async def list_companies(self, options: PaginationOptions, user: User) -> Page[CompanyResponse]:
        stmt = apply_list_filters(self.scope(select(Company), user), Company, options)
        return await paginate(
            self.db, stmt, options, CompanyResponse, (Company.created_at, Company.id)
        )

    async def get_company(self, company_id: UUID, user: User) -> CompanyResponse:
        company = await self._get_accessible(company_id, user, "get")
        return CompanyResponse.model_validate(company)

    # -----------------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------------

    async def create_company(self, data: CompanyCreateRequest, owner: User) -> CompanyResponse:
        company = Company(name=data.name, owner_id=owner.id)
        self.db.add(company)
        await self.db.flush()
        await self.db.refresh(company)
        logger.info("Company %s created by user %s", company.id, owner.id)
        return CompanyResponse.model_validate(company)

    async def update_company(
        self, company_id: UUID, data: CompanyUpdateRequest, user: User
    ) -> CompanyResponse:
        company = await self._get_accessible(company_id, user, "update")

        if data.name is not None:
            company.name = data.name
        if data.owner_id is not None and data.owner_id != company.owner_id:
            new_owner = await self.db.get(User, data.owner_id)
            if new_owner is None or new_owner.deleted_at is not None:
                raise not_found("user")
            company.owner_id = new_owner.id
        if data.unarchive:
            company.deleted_at = None

        await self.db.flush()
        await self.db.refresh(company)
        return CompanyResponse.model_validate(company)

    async def archive_company(self, company_id: UUID, user: User) -> CompanyResponse:
        company = await self._get_accessible(company_id, user, "delete")
        company.deleted_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(company)
        logger.info("Company %s archived by user %s", company.id, user.id)
        return CompanyResponse.model_validate(company)
