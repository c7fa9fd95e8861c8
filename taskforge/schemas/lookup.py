"""
Status and priority schemas.

Both are flat name-only lookup tables managed by admins.
"""

from __future__ import annotations

from uuid import UUID

from pydantic import Field

from taskforge.schemas.common import CamelModel, Page, RequestModel


class LookupCreateRequest(RequestModel):
    name: str = Field(min_length=1, max_length=64)


class LookupUpdateRequest(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=64)


class LookupResponse(CamelModel):
    id: UUID
    name: str


LookupPage = Page[LookupResponse]
