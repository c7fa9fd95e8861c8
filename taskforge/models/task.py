"""
Task ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.priority import Priority
    from taskforge.models.status import Status
    from taskforge.models.user import User


class Task(Base, UUIDMixin, TimestampMixin, SoftDeleteMixin):
    """Represents a work item reported by one user and optionally assigned to another."""

    __tablename__ = "tasks"

    name: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(String(1024), nullable=False)
    status_id: Mapped[UUID] = mapped_column(
        ForeignKey("statuses.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    priority_id: Mapped[UUID] = mapped_column(
        ForeignKey("priorities.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    assignee_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    reporter_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Relationships
    status: Mapped[Status] = relationship("Status", back_populates="tasks")
    priority: Mapped[Priority] = relationship("Priority", back_populates="tasks")
    assignee: Mapped[User | None] = relationship(
        "User", foreign_keys=[assignee_id], back_populates="assigned_tasks"
    )
    reporter: Mapped[User] = relationship(
        "User", foreign_keys=[reporter_id], back_populates="reported_tasks"
    )

    def __repr__(self) -> str:
        return f"<Task id={self.id} name={self.name!r} reporter_id={self.reporter_id}>"
