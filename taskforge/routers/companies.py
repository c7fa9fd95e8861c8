"""
Company management endpoints.

CRUD operations for companies, scoped to the owner unless the caller is admin.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import get_current_user, json_or_form, request_body
from taskforge.models.user import User
from taskforge.schemas.common import PaginationOptions
from taskforge.schemas.company import (
    CompanyCreateRequest,
    CompanyPage,
    CompanyResponse,
    CompanyUpdateRequest,
)
from taskforge.services.company_service import CompanyService

router = APIRouter()


def get_company_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> CompanyService:
    """Dependency that constructs CompanyService."""
    return CompanyService(db=db)


@router.post(
    "/pagination",
    response_model=CompanyPage,
    summary="List companies visible to the caller",
    openapi_extra=request_body(PaginationOptions),
)
async def list_companies(
    options: PaginationOptions = Depends(json_or_form(PaginationOptions)),
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
) -> CompanyPage:
    return await service.list_companies(options, current_user)


@router.get(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Get company detail",
)
async def get_company(
    company_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.get_company(company_id, current_user)


@router.post(
    "",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company owned by the caller",
    openapi_extra=request_body(CompanyCreateRequest),
)
async def create_company(
    data: CompanyCreateRequest = Depends(json_or_form(CompanyCreateRequest)),
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.create_company(data, current_user)


@router.patch(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Update, transfer or unarchive a company",
    openapi_extra=request_body(CompanyUpdateRequest),
)
async def update_company(
    company_id: UUID,
    data: CompanyUpdateRequest = Depends(json_or_form(CompanyUpdateRequest)),
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.update_company(company_id, data, current_user)


@router.delete(
    "/{company_id}",
    response_model=CompanyResponse,
    summary="Archive (soft delete) a company",
)
async def delete_company(
    company_id: UUID,
    current_user: User = Depends(get_current_user),
    service: CompanyService = Depends(get_company_service),
) -> CompanyResponse:
    return await service.archive_company(company_id, current_user)
