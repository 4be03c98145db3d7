"""Tests for the task models."""

from datetime import UTC, datetime

from todolist.models import Task, TaskUpdate


def test_task_json_shape():
    task = Task(
        id="1",
        title="Buy milk",
        created_at=datetime(2026, 1, 2, 15, 4, tzinfo=UTC),
        updated_at=datetime(2026, 1, 3, tzinfo=UTC),
    )

    data = task.to_api()

    assert data == {
        "id": "1",
        "title": "Buy milk",
        "isDone": False,
        "createdAt": "2026-01-02T15:04:00Z",
    }


def test_task_accepts_wire_names():
    task = Task.model_validate(
        {"id": "1", "title": "t", "isDone": True, "createdAt": "2026-01-02T15:04:00Z"}
    )

    assert task.is_done is True
    assert task.created_at.tzinfo is not None


def test_task_update_sends_only_provided_fields():
    assert TaskUpdate(is_done=False).to_api() == {"isDone": False}
    assert TaskUpdate(title="x").to_api() == {"title": "x"}
    assert TaskUpdate().to_api() == {}
