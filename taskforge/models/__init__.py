"""
SQLAlchemy ORM models.

All models imported here to ensure they are registered with Base.metadata.
Import order matters: base models before dependent models.
"""

from taskforge.models.base import Base, SoftDeleteMixin, TimestampMixin, UUIDMixin
from taskforge.models.user import User
from taskforge.models.company import Company
from taskforge.models.project import Project
from taskforge.models.status import Status
from taskforge.models.priority import Priority
from taskforge.models.task import Task

__all__ = [
    "Base",
    "SoftDeleteMixin",
    "TimestampMixin",
    "UUIDMixin",
    "User",
    "Company",
    "Project",
    "Status",
    "Priority",
    "Task",
]
