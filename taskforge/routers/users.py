"""
User profile endpoints.

The caller's own profile under /me, lookups by id, and admin updates.
"""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import get_current_user, json_or_form, request_body, require_admin
from taskforge.models.user import User
from taskforge.schemas.user import AdminUserUpdateRequest, UserResponse, UserUpdateRequest
from taskforge.services.user_service import UserService

router = APIRouter()


def get_user_service(
    db: AsyncSession = Depends(get_db, scope="function"),
) -> UserService:
    return UserService(db=db)


# ---------------------------------------------------------------------------
# Me
# ---------------------------------------------------------------------------

@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile",
)
async def get_me(current_user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(current_user)


@router.put(
    "/me",
    response_model=UserResponse,
    summary="Update current user profile",
    openapi_extra=request_body(UserUpdateRequest),
)
async def update_me(
    data: UserUpdateRequest = Depends(json_or_form(UserUpdateRequest)),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.update_user(current_user, data)


@router.delete(
    "/me",
    response_model=UserResponse,
    summary="Archive the current user's account",
)
async def delete_me(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Soft-delete the caller's account.

    Existing tokens stop working on the next request.
    """
    return await service.delete_user(current_user)


# ---------------------------------------------------------------------------
# By id
# ---------------------------------------------------------------------------

@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user by id",
)
async def get_user(
    user_id: UUID,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.get_user(user_id)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update any user (admin only)",
    openapi_extra=request_body(AdminUserUpdateRequest),
)
async def admin_update_user(
    user_id: UUID,
    data: AdminUserUpdateRequest = Depends(json_or_form(AdminUserUpdateRequest)),
    admin: User = Depends(require_admin),
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return await service.admin_update_user(user_id, data)
