"""User model."""

from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from tasktracker.database import Base
from tasktracker.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and task ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(100), unique=True, nullable=False, index=True)  # normalized
    password_hash = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False)

    # Relationships
    tasks = relationship("Task", back_populates="owner", passive_deletes=True)
