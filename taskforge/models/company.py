"""
Company ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.project import Project
    from taskforge.models.user import User


class Company(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """A company owned by a single user; groups projects."""

    __tablename__ = "companies"

    name: Mapped[str] = mapped_column(String(32), nullable=False)
    owner_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    owner: Mapped[User | None] = relationship("User", back_populates="companies")
    projects: Mapped[list[Project]] = relationship("Project", back_populates="company")

    def __repr__(self) -> str:
        return f"<Company id={self.id} name={self.name!r} owner_id={self.owner_id}>"
