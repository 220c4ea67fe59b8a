"""Task API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from tasktracker.api.dependencies import get_current_identity, get_task_repository
from tasktracker.schemas.task import TaskCreate, TaskResponse, TaskUpdate
from tasktracker.services.authorization import Identity
from tasktracker.services.tasks import TaskRepository

# Every task route sits behind the authorization gate
router = APIRouter(
    prefix="/api/tasks",
    tags=["tasks"],
    dependencies=[Depends(get_current_identity)],
)


@router.get("", response_model=list[TaskResponse])
def get_tasks(
    identity: Annotated[Identity, Depends(get_current_identity)],
    tasks: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Get all tasks owned by the current user, newest first."""
    return tasks.list(identity.user_id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_data: TaskCreate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    tasks: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Create a new task."""
    return tasks.create(
        identity.user_id,
        task_data.title,
        description=task_data.description,
        status=task_data.status,
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    tasks: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Get a specific task."""
    return tasks.get(identity.user_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
@router.patch("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_data: TaskUpdate,
    identity: Annotated[Identity, Depends(get_current_identity)],
    tasks: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Update a task. Fields missing from the body keep their current value."""
    return tasks.update(identity.user_id, task_id, task_data.model_dump(exclude_unset=True))


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    identity: Annotated[Identity, Depends(get_current_identity)],
    tasks: Annotated[TaskRepository, Depends(get_task_repository)],
):
    """Permanently delete a task."""
    tasks.delete(identity.user_id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
