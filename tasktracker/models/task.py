"""Task model."""

from sqlalchemy import Column, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from tasktracker.database import Base
from tasktracker.models.enums import TaskStatus
from tasktracker.models.mixins import TimestampMixin


class Task(Base, TimestampMixin):
    """A private task record, visible only to its owner."""

    __tablename__ = "tasks"
    __table_args__ = (Index("ix_tasks_owner_id_created_at", "owner_id", "created_at"),)

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    status = Column(String(20), nullable=False, default=TaskStatus.PENDING.value)

    # Relationships
    owner = relationship("User", back_populates="tasks")
