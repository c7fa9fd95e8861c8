"""
User ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.company import Company
    from taskforge.models.task import Task


class User(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Represents an account that can sign in with email and password."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    name: Mapped[str | None] = mapped_column(String(35), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Relationships
    companies: Mapped[list[Company]] = relationship("Company", back_populates="owner")
    assigned_tasks: Mapped[list[Task]] = relationship(
        "Task", foreign_keys="Task.assignee_id", back_populates="assignee"
    )
    reported_tasks: Mapped[list[Task]] = relationship(
        "Task", foreign_keys="Task.reporter_id", back_populates="reporter"
    )

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email!r}>"
