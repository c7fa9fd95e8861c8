"""
Authentication business logic.

Handles sign-up, sign-in, token refresh and logout.
All business logic lives here; routers only handle HTTP concerns.
"""

from __future__ import annotations

import logging
from typing import Any
from uuid import UUID

import redis.asyncio as aioredis
from fastapi import HTTPException, status
from jose import JWTError
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.config import settings
from taskforge.core.security import (
    blacklist_redis_key,
    create_access_token,
    create_refresh_token,
    decode_refresh_token,
    refresh_token_redis_key,
    seconds_until_expiry,
    verify_password,
)
from taskforge.models.user import User
from taskforge.schemas.auth import SignInRequest, SignUpRequest, TokenResponse
from taskforge.services.user_service import UserService

logger = logging.getLogger(__name__)


def _invalid_credentials() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": "INVALID_CREDENTIALS", "message": "Invalid email or password"},
    )


class AuthService:
    """Handles all authentication operations."""

    def __init__(self, db: AsyncSession, redis: aioredis.Redis) -> None:
        self.db = db
        self.redis = redis
        self.users = UserService(db)

    # -----------------------------------------------------------------------
    # Sign up
    # -----------------------------------------------------------------------

    async def sign_up(self, data: SignUpRequest) -> TokenResponse:
        """
        Register a new user.

        - Validates email uniqueness
        - Hashes password
        - Issues JWT tokens
        """
        user = await self.users.create(email=data.email, password=data.password, name=data.name)
        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Sign in
    # -----------------------------------------------------------------------

    async def sign_in(self, data: SignInRequest) -> TokenResponse:
        """
        Authenticate user with email + password.

        The stored bcrypt hash is checked with verify_password; the plaintext
        is never re-hashed for comparison. Raises 401 for unknown email,
        wrong password or an archived account without saying which.
        """
        user = await self.users.get_by_email(data.email)

        if user is None or not verify_password(data.password, user.password_hash):
            logger.info("Failed sign-in for %s", data.email)
            raise _invalid_credentials()

        if user.deleted_at is not None:
            raise _invalid_credentials()

        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Refresh
    # -----------------------------------------------------------------------

    async def refresh(self, refresh_token: str) -> TokenResponse:
        """
        Exchange a valid refresh token for a new token pair.

        - Validates refresh token JWT
        - Checks token exists in Redis
        - Rotates: deletes old refresh token, issues new pair
        """
        payload = self._decode_refresh(refresh_token)
        user_id: str = payload.get("sub", "")
        jti: str = payload.get("jti", "")

        redis_key = refresh_token_redis_key(user_id, jti)
        if not await self.redis.exists(redis_key):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"code": "TOKEN_REVOKED", "message": "Refresh token has been revoked"},
            )

        try:
            user = await self.db.get(User, UUID(user_id))
        except ValueError:
            user = None

        if user is None or user.deleted_at is not None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"code": "USER_NOT_FOUND", "message": "User not found or deleted"},
            )

        await self.redis.delete(redis_key)
        return await self._issue_tokens(user)

    # -----------------------------------------------------------------------
    # Logout
    # -----------------------------------------------------------------------

    async def logout(self, access_payload: dict[str, Any], refresh_token: str) -> None:
        """
        Logout user by:
        - Blacklisting the access token JTI until it would have expired
        - Deleting the refresh token from Redis
        """
        await self.redis.setex(
            blacklist_redis_key(access_payload.get("jti", "")),
            seconds_until_expiry(access_payload),
            "1",
        )

        try:
            payload = decode_refresh_token(refresh_token)
        except JWTError:
            # Already expired or malformed: nothing left to revoke
            return
        if payload.get("sub") != access_payload.get("sub"):
            return
        await self.redis.delete(refresh_token_redis_key(payload["sub"], payload.get("jti", "")))

    # -----------------------------------------------------------------------
    # Internal helpers
    # -----------------------------------------------------------------------

    @staticmethod
    def _decode_refresh(token: str) -> dict[str, Any]:
        try:
            return decode_refresh_token(token)
        except JWTError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail={"code": "INVALID_TOKEN", "message": "Refresh token is invalid or expired"},
            )

    async def _issue_tokens(self, user: User) -> TokenResponse:
        """
        Create and store access + refresh token pair for a user.

        Stores refresh token JTI in Redis with TTL.
        """
        user_id = str(user.id)

        refresh_token, refresh_jti = create_refresh_token(user_id)
        access_token, _ = create_access_token(user_id, user.name)

        ttl_seconds = settings.JWT_REFRESH_TOKEN_EXPIRE_HOURS * 60 * 60
        await self.redis.setex(
            refresh_token_redis_key(user_id, refresh_jti),
            ttl_seconds,
            "1",
        )

        return TokenResponse(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        )
