"""SQLAlchemy models."""

from tasktracker.models.task import Task
from tasktracker.models.user import User

__all__ = [
    "User",
    "Task",
]
