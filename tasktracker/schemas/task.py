"""Task schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TaskCreate(BaseModel):
    """Create a task. Omitted description and status take their defaults."""

    title: str | None = None
    description: str | None = None
    status: str | None = None


class TaskUpdate(BaseModel):
    """Partial task update. Only fields present in the body are changed."""

    title: str | None = None
    description: str | None = None
    status: str | None = None


class TaskResponse(BaseModel):
    """Task response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    title: str
    description: str
    status: str
    created_at: datetime
    updated_at: datetime
