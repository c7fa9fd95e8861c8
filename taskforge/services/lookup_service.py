"""
Status and priority business logic.

Both tables are global reference data: readable by any user, writable by
admins, hard-deleted. Deleting a row that tasks still point at fails with a
constraint violation.
"""

from __future__ import annotations

import logging
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from taskforge.core.exceptions import not_found
from taskforge.models.priority import Priority
from taskforge.models.status import Status
from taskforge.schemas.common import Page, PaginationOptions
from taskforge.schemas.lookup import LookupCreateRequest, LookupResponse, LookupUpdateRequest
from taskforge.services.pagination import apply_list_filters, paginate

logger = logging.getLogger(__name__)


class LookupService:
    """CRUD over a name-only lookup model (Status or Priority)."""

    def __init__(self, db: AsyncSession, model: type[Status] | type[Priority], entity: str) -> None:
        self.db = db
        self.model = model
        self.entity = entity

    async def _get(self, item_id: UUID) -> Status | Priority:
        item = await self.db.get(self.model, item_id)
        if item is None:
            raise not_found(self.entity)
        return item

    async def list_items(self, options: PaginationOptions) -> Page[LookupResponse]:
        stmt = apply_list_filters(select(self.model), self.model, options)
        return await paginate(
            self.db, stmt, options, LookupResponse, (self.model.name, self.model.id)
        )

    async def get_item(self, item_id: UUID) -> LookupResponse:
        return LookupResponse.model_validate(await self._get(item_id))

    async def create_item(self, data: LookupCreateRequest) -> LookupResponse:
        item = self.model(name=data.name)
        self.db.add(item)
        await self.db.flush()
        await self.db.refresh(item)
        logger.info("%s %s created: %r", self.entity.capitalize(), item.id, item.name)
        return LookupResponse.model_validate(item)

    async def update_item(self, item_id: UUID, data: LookupUpdateRequest) -> LookupResponse:
        item = await self._get(item_id)
        if data.name is not None:
            item.name = data.name
        await self.db.flush()
        await self.db.refresh(item)
        return LookupResponse.model_validate(item)

    async def delete_item(self, item_id: UUID) -> LookupResponse:
        item = await self._get(item_id)
        response = LookupResponse.model_validate(item)
        await self.db.execute(delete(self.model).where(self.model.id == item_id))
        logger.info("%s %s deleted", self.entity.capitalize(), item_id)
        return response