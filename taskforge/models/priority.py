"""
Priority ORM model.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskforge.models.base import Base, UUIDMixin

if TYPE_CHECKING:
    from taskforge.models.task import Task


class Priority(Base, UUIDMixin):
    """Urgency level attached to a task (e.g. High, Low)."""

    __tablename__ = "priorities"

    name: Mapped[str] = mapped_column(String(64), nullable=False)

    tasks: Mapped[list[Task]] = relationship(
        "Task", back_populates="priority", passive_deletes="all"
    )

    def __repr__(self) -> str:
        return f"<Priority id={self.id} name={self.name!r}>"
