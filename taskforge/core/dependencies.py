"""
FastAPI dependency injection functions.

Provides Redis connections, token decoding, current user, admin enforcement
and request bodies that accept either JSON or form encoding.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import UUID

import redis.asyncio as aioredis
from fastapi import Depends, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import BaseModel, ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.config import settings
from taskforge.core.database import get_db
from taskforge.core.security import blacklist_redis_key, decode_access_token
from taskforge.models.user import User

M = TypeVar("M", bound=BaseModel)

# ---------------------------------------------------------------------------
# HTTP Bearer scheme (auto_error=False so we can return custom 401)
# ---------------------------------------------------------------------------

bearer_scheme = HTTPBearer(auto_error=False)

# ---------------------------------------------------------------------------
# Redis
# ---------------------------------------------------------------------------

_redis_pool: aioredis.Redis | None = None


async def get_redis() -> aioredis.Redis:
    """
    Return a shared async Redis client.

    Uses a module-level pool so connections are reused across requests.
    """
    global _redis_pool
    if _redis_pool is None:
        _redis_pool = aioredis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
        )
    return _redis_pool


async def close_redis() -> None:
    """Close the shared Redis client on shutdown."""
    global _redis_pool
    if _redis_pool is not None:
        await _redis_pool.aclose()
        _redis_pool = None


# ---------------------------------------------------------------------------
# Current user
# ---------------------------------------------------------------------------

def _unauthorized(code: str, message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail={"code": code, "message": message},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_token_payload(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    redis: aioredis.Redis = Depends(get_redis),
) -> dict[str, Any]:
    """
    Validate the Bearer access token and return its decoded payload.

    Raises 401 if no token is provided, the token is invalid or expired,
    or its JTI is blacklisted.
    """
    if credentials is None:
        raise _unauthorized("MISSING_TOKEN", "Authorization header required")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise _unauthorized("INVALID_TOKEN", "Token is invalid or expired")

    jti: str = payload.get("jti", "")
    if await redis.exists(blacklist_redis_key(jti)):
        raise _unauthorized("TOKEN_REVOKED", "Token has been revoked")

    return payload


async def get_current_user(
    payload: dict[str, Any] = Depends(get_token_payload),
    db: AsyncSession = Depends(get_db, scope="function"),
) -> User:
    """
    Return the authenticated User.

    Raises 401 if the subject does not exist or the account is archived.
    """
    try:
        user_id = UUID(payload.get("sub", ""))
    except ValueError:
        raise _unauthorized("INVALID_TOKEN", "Token subject is malformed")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or user.deleted_at is not None:
        raise _unauthorized("USER_NOT_FOUND", "User not found or deleted")

    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require the authenticated user to carry the admin flag."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "ADMIN_REQUIRED", "message": "Administrator access required"},
        )
    return current_user


# ---------------------------------------------------------------------------
# Request bodies
# ---------------------------------------------------------------------------

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def json_or_form(model: type[M]) -> Callable[[Request], Awaitable[M]]:
    """
    Dependency factory that parses the request body into ``model``.

    Accepts application/json and form-encoded bodies. Validation failures are
    reported as FastAPI's regular 422 response.

    Usage:
        @router.post("/", openapi_extra=request_body(CompanyCreateRequest))
        async def endpoint(data: CompanyCreateRequest = Depends(json_or_form(CompanyCreateRequest))):
            ...
    """

    async def parse(request: Request) -> M:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(_FORM_TYPES):
            form = await request.form()
            raw: Any = {key: value for key, value in form.items()}
        else:
            body = await request.body()
            try:
                raw = await request.json() if body else {}
            except ValueError:
                raise RequestValidationError(
                    [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}}]
                )

        try:
            return model.model_validate(raw)
        except ValidationError as exc:
            errors = [
                {**error, "loc": ("body", *error["loc"])}
                for error in exc.errors(include_url=False)
            ]
            raise RequestValidationError(errors)

    return parse


def request_body(model: type[BaseModel]) -> dict[str, Any]:
    """OpenAPI requestBody for endpoints using ``json_or_form``."""
    schema = model.model_json_schema(by_alias=True)
    return {
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": schema},
                "application/x-www-form-urlencoded": {"schema": schema},
            },
        }
    }
