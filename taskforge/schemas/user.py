"""
User schemas.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from taskforge.schemas.common import CamelModel, RequestModel


class UserUpdateRequest(RequestModel):
    """Request body for PUT /users/me."""

    name: str | None = Field(default=None, min_length=1, max_length=35)
    email: EmailStr | None = None

    @field_validator("email")
    @classmethod
    def normalise_email(cls, v: str | None) -> str | None:
        return v.lower() if v is not None else v


class AdminUserUpdateRequest(UserUpdateRequest):
    """Request body for PUT /users/{user_id} (admin only)."""

    is_admin: bool | None = None


class UserResponse(CamelModel):
    id: UUID
    name: str | None
    email: str
    is_admin: bool
    deleted_at: datetime | None
