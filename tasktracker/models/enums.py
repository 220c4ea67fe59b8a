"""Enums for model fields."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle states of a task.

    Any state may be reached from any other; there is no enforced workflow.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]
