"""
User business logic.

Profile reads/updates, admin updates and self soft-delete.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.exceptions import bad_request, not_found
from taskforge.core.security import hash_password
from taskforge.models.user import User
from taskforge.schemas.user import AdminUserUpdateRequest, UserResponse, UserUpdateRequest

logger = logging.getLogger(__name__)


class UserService:

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        password: str,
        name: str | None = None,
        is_admin: bool = False,
    ) -> User:
        """Create a user with a hashed password. Raises 400 if the email is taken."""
        await self._ensure_email_free(email)
        user = User(
            email=email.lower(),
            name=name,
            password_hash=hash_password(password),
            is_admin=is_admin,
        )
        self.db.add(user)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info("User %s created (admin=%s)", user.id, user.is_admin)
        return user

    async def get_user(self, user_id: UUID) -> UserResponse:
        user = await self.db.get(User, user_id)
        if user is None:
            raise not_found("user")
        return UserResponse.model_validate(user)

    async def update_user(self, user: User, data: UserUpdateRequest) -> UserResponse:
        if data.name is not None:
            user.name = data.name
        if data.email is not None and data.email != user.email:
            await self._ensure_email_free(data.email)
            user.email = data.email
        await self.db.flush()
        await self.db.refresh(user)
        return UserResponse.model_validate(user)

    async def admin_update_user(self, user_id: UUID, data: AdminUserUpdateRequest) -> UserResponse:
        user = await self.db.get(User, user_id)
        if user is None:
            raise not_found("user")
        if data.is_admin is not None:
            user.is_admin = data.is_admin
        return await self.update_user(user, data)

    async def delete_user(self, user: User) -> UserResponse:
        user.deleted_at = datetime.now(UTC)
        await self.db.flush()
        await self.db.refresh(user)
        logger.info("User %s archived their account", user.id)
        return UserResponse.model_validate(user)

    async def _ensure_email_free(self, email: str) -> None:
        if await self.get_by_email(email) is not None:
            raise bad_request("EMAIL_TAKEN", "User with such email already exists")
