"""
Status ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.task import Task


class Status(Base, UUIDMixin):
    """Workflow state a task can be in (e.g. Todo, In Progress)."""

    __tablename__ = "statuses"

    name: Mapped[str] = mapped_column(String(64), nullable=False)

    tasks: Mapped[list[Task]] = relationship(
        "Task", back_populates="status", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Status id={self.id} name={self.name!r}>"
