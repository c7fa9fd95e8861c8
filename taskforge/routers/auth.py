"""
Authentication endpoints.

Sign-up, sign-in, token refresh and logout.
"""

from __future__ import annotations

from typing import Any

import redis.asyncio as aioredis
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.database import get_db
from taskforge.core.dependencies import (
    get_current_user,
    get_redis,
    get_token_payload,
    json_or_form,
    request_body,
)
from taskforge.models.user import User
from taskforge.schemas.auth import (
    LogoutRequest,
    RefreshRequest,
    SignInRequest,
    SignUpRequest,
    TokenResponse,
)
from taskforge.services.auth_service import AuthService

router = APIRouter()


def get_auth_service(
    db: AsyncSession = Depends(get_db, scope="function"),
    redis: aioredis.Redis = Depends(get_redis),
) -> AuthService:
    """Dependency that constructs AuthService."""
    return AuthService(db=db, redis=redis)


# ---------------------------------------------------------------------------
# Sign up
# ---------------------------------------------------------------------------

@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    openapi_extra=request_body(SignUpRequest),
)
async def sign_up(
    data: SignUpRequest = Depends(json_or_form(SignUpRequest)),
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Create a new user account.

    - Email must be unique (case-insensitive)
    - Password must be 8 to 100 characters
    - Returns JWT access + refresh tokens on success
    """
    return await service.sign_up(data)


# ---------------------------------------------------------------------------
# Sign in
# ---------------------------------------------------------------------------

@router.post(
    "/signin",
    response_model=TokenResponse,
    summary="Sign in with email and password",
    openapi_extra=request_body(SignInRequest),
)
async def sign_in(
    data: SignInRequest = Depends(json_or_form(SignInRequest)),
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Authenticate with email and password.

    Returns JWT access + refresh tokens.
    """
    return await service.sign_in(data)


# ---------------------------------------------------------------------------
# Refresh
# ---------------------------------------------------------------------------

@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh access token",
    openapi_extra=request_body(RefreshRequest),
)
async def refresh(
    data: RefreshRequest = Depends(json_or_form(RefreshRequest)),
    service: AuthService = Depends(get_auth_service),
) -> TokenResponse:
    """
    Exchange a valid refresh token for a new access + refresh token pair.

    Refresh tokens are rotated on every use.
    """
    return await service.refresh(data.refresh_token)


# ---------------------------------------------------------------------------
# Logout
# ---------------------------------------------------------------------------

@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout and revoke tokens",
    openapi_extra=request_body(LogoutRequest),
)
async def logout(
    data: LogoutRequest = Depends(json_or_form(LogoutRequest)),
    payload: dict[str, Any] = Depends(get_token_payload),
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> None:
    """
    Logout the current user.

    - Blacklists the current access token JTI in Redis
    - Deletes the refresh token from Redis
    """
    await service.logout(access_payload=payload, refresh_token=data.refresh_token)
