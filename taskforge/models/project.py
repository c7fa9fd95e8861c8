"""
Project ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.company import Company


class Project(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """A project belonging to a company. Access follows company ownership."""

    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(32), nullable=False)
    company_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("companies.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    company: Mapped[Company | None] = relationship("Company", back_populates="projects")

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name!r} company_id={self.company_id}>"
