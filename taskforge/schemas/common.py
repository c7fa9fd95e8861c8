"""
Shared schema building blocks.

camelCase wire format, pagination options and the paginated envelope.
"""

from __future__ import annotations

import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys; accepts snake_case on input too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies. Unknown fields are rejected with a 422."""

    model_config = ConfigDict(extra="forbid")


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

class PaginationOptions(RequestModel):
    """Request body for POST /<resource>/pagination."""

    page: int = Field(default=1, ge=1, description="Current page (1-based)")
    per_page: int = Field(default=12, ge=1, le=100, description="Items per page")
    search: str | None = Field(
        default=None,
        max_length=200,
        description="Case-insensitive name prefix",
    )
    include_deleted: bool = Field(
        default=False,
        description="Include archived (soft-deleted) records",
    )

    @property
    def offset(self) -> int:
        return self.per_page * (self.page - 1)


class PaginationMeta(CamelModel):
    page: int
    per_page: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, options: PaginationOptions, total: int) -> PaginationMeta:
        return cls(
            page=options.page,
            per_page=options.per_page,
            total=total,
            total_pages=math.ceil(total / options.per_page),
        )


class Page(CamelModel, Generic[T]):
    """Paginated envelope: {items, meta}."""

    items: list[T]
    meta: PaginationMeta
