"""Task repository tests."""

import pytest
from sqlalchemy import delete
from sqlalchemy.orm import Session

from tasktracker.errors import NotFound, ValidationError
from tasktracker.models.task import Task
from tasktracker.services.tasks import TaskRepository


@pytest.fixture
def tasks(db):
    return TaskRepository(db)


def test_list_empty(tasks, alice):
    """Test listing tasks for a user with none."""
    assert list(tasks.list(alice.id)) == []


def test_list_newest_first(tasks, alice):
    """Test that tasks are returned in creation-descending order."""
    tasks.create(alice.id, "X")
    tasks.create(alice.id, "Y")

    assert [task.title for task in tasks.list(alice.id)] == ["Y", "X"]


def test_list_only_own_tasks(tasks, alice, bob):
    """Test that another user's tasks are never listed."""
    tasks.create(alice.id, "Alice task")
    tasks.create(bob.id, "Bob task")

    assert [task.title for task in tasks.list(alice.id)] == ["Alice task"]
    assert [task.title for task in tasks.list(bob.id)] == ["Bob task"]


def test_create_defaults(tasks, alice):
    """Test that description defaults to empty and status to pending."""
    task = tasks.create(alice.id, "Buy milk")

    assert task.id is not None
    assert task.owner_id == alice.id
    assert task.title == "Buy milk"
    assert task.description == ""
    assert task.status == "pending"
    assert task.created_at is not None
    assert task.updated_at is not None


def test_create_with_all_fields(tasks, alice):
    """Test creating a task with description and status."""
    task = tasks.create(alice.id, "Write report", description="Q3 numbers", status="in_progress")

    assert task.description == "Q3 numbers"
    assert task.status == "in_progress"


@pytest.mark.parametrize("title", [None, "", "   "])
def test_create_requires_title(tasks, alice, title):
    """Test that a missing or blank title is a validation error."""
    with pytest.raises(ValidationError) as exc_info:
        tasks.create(alice.id, title)

    assert exc_info.value.reasons == ["Title is required"]


def test_create_rejects_unknown_status(tasks, alice):
    """Test that only the three status values are accepted."""
    with pytest.raises(ValidationError) as exc_info:
        tasks.create(alice.id, "Task", status="done")

    assert exc_info.value.reasons == ["Status must be one of: pending, in_progress, completed"]


def test_get_own_task(tasks, alice):
    """Test fetching a task by id."""
    task = tasks.create(alice.id, "Mine")

    assert tasks.get(alice.id, task.id).title == "Mine"


def test_other_user_cannot_see_update_or_delete(tasks, alice, bob):
    """Test that another user's task behaves as if it does not exist."""
    task = tasks.create(alice.id, "Private")

    with pytest.raises(NotFound):
        tasks.get(bob.id, task.id)
    with pytest.raises(NotFound):
        tasks.update(bob.id, task.id, {"status": "completed"})
    with pytest.raises(NotFound):
        tasks.delete(bob.id, task.id)

    # The owner still has full access and nothing changed
    unchanged = tasks.get(alice.id, task.id)
    assert unchanged.status == "pending"
    tasks.delete(alice.id, task.id)


def test_foreign_and_missing_task_errors_match(tasks, alice, bob):
    """Test that not-owned and non-existent look identical."""
    task = tasks.create(alice.id, "Private")

    with pytest.raises(NotFound) as foreign:
        tasks.get(bob.id, task.id)
    with pytest.raises(NotFound) as missing:
        tasks.get(bob.id, task.id + 1000)

    assert foreign.value.message == missing.value.message
    assert foreign.value.details == missing.value.details


def test_update_status_keeps_description(tasks, alice):
    """Test that unspecified fields keep their previous value."""
    task = tasks.create(alice.id, "Task", description="Keep me")

    updated = tasks.update(alice.id, task.id, {"status": "completed"})

    assert updated.id == task.id
    assert updated.status == "completed"
    assert updated.description == "Keep me"
    assert updated.title == "Task"


def test_update_description_to_empty(tasks, alice):
    """Test that an explicit empty description is applied."""
    task = tasks.create(alice.id, "Task", description="Something")

    updated = tasks.update(alice.id, task.id, {"description": ""})

    assert updated.description == ""


def test_update_any_status_transition(tasks, alice):
    """Test that every status can move to every other directly."""
    task = tasks.create(alice.id, "Task")

    for status in ["completed", "pending", "in_progress", "completed", "in_progress", "pending"]:
        assert tasks.update(alice.id, task.id, {"status": status}).status == status


def test_update_title(tasks, alice):
    """Test renaming a task."""
    task = tasks.create(alice.id, "Old")

    assert tasks.update(alice.id, task.id, {"title": "  New  "}).title == "New"


@pytest.mark.parametrize(
    ("patch", "reason"),
    [
        ({"title": ""}, "Title is required"),
        ({"status": "archived"}, "Status must be one of: pending, in_progress, completed"),
        ({"status": None}, "Status cannot be null"),
        ({"description": None}, "Description cannot be null"),
        ({"owner_id": 99}, "Unknown field: owner_id"),
    ],
)
def test_update_validation(tasks, alice, patch, reason):
    """Test that invalid patches are rejected without touching the task."""
    task = tasks.create(alice.id, "Task")

    with pytest.raises(ValidationError) as exc_info:
        tasks.update(alice.id, task.id, patch)

    assert exc_info.value.reasons == [reason]
    assert tasks.get(alice.id, task.id).owner_id == alice.id


def test_update_missing_task(tasks, alice):
    """Test updating a task that does not exist."""
    with pytest.raises(NotFound):
        tasks.update(alice.id, 999, {"title": "Ghost"})


def test_delete(tasks, alice):
    """Test that deletion is permanent."""
    task = tasks.create(alice.id, "Short-lived")

    tasks.delete(alice.id, task.id)

    assert list(tasks.list(alice.id)) == []
    with pytest.raises(NotFound):
        tasks.get(alice.id, task.id)
    with pytest.raises(NotFound):
        tasks.delete(alice.id, task.id)


def test_update_of_task_deleted_after_lookup(tasks, alice, monkeypatch):
    """Test that a task deleted between lookup and write is not resurrected."""
    task = tasks.create(alice.id, "Racy")
    task_id = task.id
    lookup = tasks._get_owned

    def lookup_then_concurrent_delete(owner_id, lookup_task_id, for_update=False):
        found = lookup(owner_id, lookup_task_id, for_update=for_update)
        other = Session(bind=tasks.db.get_bind())
        other.execute(delete(Task).where(Task.id == lookup_task_id))
        other.commit()
        other.close()
        return found

    monkeypatch.setattr(tasks, "_get_owned", lookup_then_concurrent_delete)

    with pytest.raises(NotFound):
        tasks.update(alice.id, task_id, {"status": "completed"})

    monkeypatch.undo()
    assert list(tasks.list(alice.id)) == []


def test_no_op_update_of_task_deleted_after_lookup(tasks, alice, monkeypatch):
    """Test that an empty patch on a task deleted mid-update is NotFound."""
    task = tasks.create(alice.id, "Racy")
    task_id = task.id
    lookup = tasks._get_owned
    deleted = []

    def lookup_then_concurrent_delete(owner_id, lookup_task_id, for_update=False):
        found = lookup(owner_id, lookup_task_id, for_update=for_update)
        if not deleted:
            other = Session(bind=tasks.db.get_bind())
            other.execute(delete(Task).where(Task.id == lookup_task_id))
            other.commit()
            other.close()
            deleted.append(lookup_task_id)
        return found

    monkeypatch.setattr(tasks, "_get_owned", lookup_then_concurrent_delete)

    with pytest.raises(NotFound):
        tasks.update(alice.id, task_id, {})


@pytest.mark.parametrize("task_id", [0, -1, 2**31, 2**63])
def test_out_of_range_ids_are_not_found(tasks, alice, task_id):
    """Test that ids no row could have behave like missing tasks."""
    tasks.create(alice.id, "Task")

    with pytest.raises(NotFound):
        tasks.get(alice.id, task_id)
    with pytest.raises(NotFound):
        tasks.update(alice.id, task_id, {"status": "completed"})
    with pytest.raises(NotFound):
        tasks.delete(alice.id, task_id)
