"""
Paginated listing shared by every resource service.

The caller passes a SELECT that already carries its ownership filter; the
same statement is used for both the count and the page query, so the two
can never disagree about which rows are visible.
"""

from __future__ import annotations

from typing import Any, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from taskforge.schemas.common import CamelModel, Page, PaginationMeta, PaginationOptions

S = TypeVar("S", bound=CamelModel)


def apply_list_filters(stmt: Select, model: Any, options: PaginationOptions) -> Select:
    """Add the name-prefix search and hide archived rows unless asked for."""
    if options.search:
        stmt = stmt.where(model.name.istartswith(options.search, autoescape=True))
    if hasattr(model, "deleted_at") and not options.include_deleted:
        stmt = stmt.where(model.deleted_at.is_(None))
    return stmt


async def paginate(
    db: AsyncSession,
    stmt: Select,
    options: PaginationOptions,
    schema: type[S],
    order_by: tuple[InstrumentedAttribute, ...],
) -> Page[S]:
    """
    Run ``stmt`` as a count query and as a page query.

    offset = perPage * (page - 1). A page past the end yields no items.
    """
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await db.execute(count_stmt)).scalar_one()

    page_stmt = stmt.order_by(*order_by).offset(options.offset).limit(options.per_page)
    result = await db.execute(page_stmt)
    items = [schema.model_validate(row) for row in result.scalars().all()]

    return Page[schema](items=items, meta=PaginationMeta.build(options, total))
