"""
Company schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import Field

from taskforge.schemas.common import CamelModel, Page, RequestModel


class CompanyCreateRequest(RequestModel):
    """Request body for POST /companies. The caller becomes the owner."""

    name: str = Field(min_length=1, max_length=32)


class CompanyUpdateRequest(RequestModel):
    """Request body for PATCH /companies/{company_id}."""

    name: str | None = Field(default=None, min_length=1, max_length=32)
    owner_id: UUID | None = Field(default=None, description="New owner uuid")
    unarchive: bool = Field(default=False, description="Unarchive deleted company")


class CompanyResponse(CamelModel):
    id: UUID
    name: str
    owner_id: UUID | None
    deleted_at: datetime | None
    updated_at: datetime
    created_at: datetime


CompanyPage = Page[CompanyResponse]
