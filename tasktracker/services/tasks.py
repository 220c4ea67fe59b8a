"""Task repository: owner-scoped task persistence."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from tasktracker.errors import InternalFailure, NotFound, ValidationError
from tasktracker.models.enums import TaskStatus
from tasktracker.models.task import Task

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 255
# Largest value an Integer primary key column holds on every supported backend
MAX_TASK_ID = 2**31 - 1
UPDATABLE_FIELDS = ("title", "description", "status")


def validate_title(title: Any) -> list[str]:
    if not isinstance(title, str) or not title.strip():
        return ["Title is required"]
    if len(title.strip()) > TITLE_MAX_LENGTH:
        return [f"Title cannot exceed {TITLE_MAX_LENGTH} characters"]
    return []


def validate_description(description: Any) -> list[str]:
    if not isinstance(description, str):
        return ["Description must be a string"]
    return []


def validate_status(status: Any) -> list[str]:
    if status not in TaskStatus.values():
        return [f"Status must be one of: {', '.join(TaskStatus.values())}"]
    return []


class TaskRepository:
    """Every operation is scoped to ``owner_id``.

    A task owned by somebody else is indistinguishable from one that does not
    exist: both raise NotFound.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self, owner_id: int) -> Sequence[Task]:
        """Get the owner's tasks, newest first."""
        query = (
            select(Task)
            .where(Task.owner_id == owner_id)
            .order_by(Task.created_at.desc(), Task.id.desc())
        )
        try:
            return self.db.scalars(query).all()
        except SQLAlchemyError as e:
            raise self._store_failure("list tasks", e) from e

    def get(self, owner_id: int, task_id: int) -> Task:
        """Get a single task by id."""
        try:
            return self._get_owned(owner_id, task_id)
        except SQLAlchemyError as e:
            raise self._store_failure("get task", e) from e

    def create(
        self,
        owner_id: int,
        title: Any,
        description: Any = None,
        status: Any = None,
    ) -> Task:
        """Create a task. Description defaults to "" and status to pending."""
        reasons = validate_title(title)
        if description is not None:
            reasons += validate_description(description)
        if status is not None:
            reasons += validate_status(status)
        if reasons:
            raise ValidationError(reasons)

        task = Task(
            owner_id=owner_id,
            title=title.strip(),
            description=description if description is not None else "",
            status=status if status is not None else TaskStatus.PENDING.value,
        )
        self.db.add(task)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_failure("create task", e) from e
        self.db.refresh(task)
        logger.info(f"Created task {task.id} for user {owner_id}")
        return task

    def update(self, owner_id: int, task_id: int, patch: Mapping[str, Any]) -> Task:
        """Apply a partial update.

        Only keys present in ``patch`` change. The ownership lookup and the
        write share one transaction; if the row disappears in between the
        result is NotFound rather than a resurrected task.
        """
        changes = self._validate_patch(patch)

        try:
            task = self._get_owned(owner_id, task_id, for_update=True)
            for field, value in changes.items():
                setattr(task, field, value)
            self.db.commit()
            # Re-read under the owner scope: a no-op patch writes nothing, so a
            # concurrent delete only shows up here
            task = self._get_owned(owner_id, task_id)
        except StaleDataError:
            self.db.rollback()
            logger.info(f"Task {task_id} was deleted before update could be written")
            raise NotFound() from None
        except SQLAlchemyError as e:
            raise self._store_failure("update task", e) from e
        return task

    def delete(self, owner_id: int, task_id: int) -> None:
        """Permanently delete a task."""
        self._check_storable_id(owner_id, task_id)
        statement = delete(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        try:
            result = self.db.execute(statement)
            if result.rowcount == 0:
                self.db.rollback()
                self._log_miss(owner_id, task_id)
                raise NotFound()
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._store_failure("delete task", e) from e
        logger.info(f"Deleted task {task_id} for user {owner_id}")

    def _get_owned(self, owner_id: int, task_id: int, for_update: bool = False) -> Task:
        self._check_storable_id(owner_id, task_id)
        query = select(Task).where(Task.id == task_id, Task.owner_id == owner_id)
        if for_update:
            query = query.with_for_update()
        task = self.db.scalars(query).first()
        if task is None:
            self._log_miss(owner_id, task_id)
            raise NotFound()
        return task

    def _check_storable_id(self, owner_id: int, task_id: int) -> None:
        # Ids the column cannot hold would fail in the driver, not miss
        if not 1 <= task_id <= MAX_TASK_ID:
            logger.debug(f"Task {task_id} requested by user {owner_id}: id out of range")
            raise NotFound()

    def _validate_patch(self, patch: Mapping[str, Any]) -> dict[str, Any]:
        reasons = [f"Unknown field: {key}" for key in patch if key not in UPDATABLE_FIELDS]
        changes = {}
        for field in UPDATABLE_FIELDS:
            if field not in patch:
                continue
            value = patch[field]
            if value is None:
                reasons.append(f"{field.capitalize()} cannot be null")
                continue
            if field == "title":
                reasons += validate_title(value)
                value = value.strip() if isinstance(value, str) else value
            elif field == "description":
                reasons += validate_description(value)
            else:
                reasons += validate_status(value)
            changes[field] = value
        if reasons:
            raise ValidationError(reasons)
        return changes

    def _log_miss(self, owner_id: int, task_id: int) -> None:
        """Record why a lookup missed. Callers only ever see NotFound."""
        if not logger.isEnabledFor(logging.DEBUG):
            return
        exists = self.db.scalar(select(Task.id).where(Task.id == task_id)) is not None
        cause = "owned by another user" if exists else "does not exist"
        logger.debug(f"Task {task_id} requested by user {owner_id}: {cause}")

    def _store_failure(self, action: str, error: SQLAlchemyError) -> InternalFailure:
        self.db.rollback()
        logger.error(f"Failed to {action}: {error}")
        return InternalFailure()
