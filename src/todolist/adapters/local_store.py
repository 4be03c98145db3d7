"""Local document store - TaskRepository backed by one JSON file.

The file behaves like a small key-value store: the task array lives under a
single well-known key and every write replaces the whole document.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from platformdirs import user_data_dir
from pydantic import ValidationError as PydanticValidationError

from todolist.models import NotFoundError, PersistError, Task, TaskUpdate
from todolist.repositories import TaskRepository
from todolist.utils.logger import get_logger
from todolist.utils.task_helpers import utc_now

STORAGE_KEY = "todo_tasks"
DEFAULT_STORE_FILE = "tasks.json"


def default_store_path() -> Path:
    """Location of the document when none is configured."""
    return Path(user_data_dir("todolist")) / DEFAULT_STORE_FILE


class LocalStoreTaskRepository(TaskRepository):
    """Task repository that keeps every task in a single JSON document."""

    def __init__(self, path: str | Path | None = None, key: str = STORAGE_KEY):
        """Initialize the local store.

        Args:
            path: Document file path. If None, uses default location.
            key: Key holding the serialized task array.
        """
        self.path = Path(path) if path is not None else default_store_path()
        self.key = key
        self.logger = get_logger("local")

    def _load_document(self) -> dict[str, Any]:
        """Load the whole document, or an empty one if the file is missing."""
        if not self.path.exists():
            return {}

        try:
            document = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error("error loading task document %s: %s", self.path, e)
            raise PersistError(f"Could not read {self.path}") from e

        if not isinstance(document, dict):
            raise PersistError(f"Malformed task document {self.path}")
        return document

    def _read_tasks(self) -> list[Task]:
        records = self._load_document().get(self.key) or []
        if not isinstance(records, list):
            raise PersistError(f"Malformed '{self.key}' entry in {self.path}")
        try:
            return [Task.model_validate(record) for record in records]
        except PydanticValidationError as e:
            self.logger.error("invalid task record in %s: %s", self.path, e)
            raise PersistError(f"Malformed task record in {self.path}") from e

    def _write_tasks(self, tasks: list[Task]) -> None:
        """Replace the stored task array, keeping any other keys."""
        document = self._load_document()
        document[self.key] = [self._to_record(task) for task in tasks]

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(json.dumps(document, indent=2), encoding="utf-8")
            os.replace(tmp_path, self.path)
        except OSError as e:
            self.logger.error("error saving task document %s: %s", self.path, e)
            raise PersistError(f"Could not write {self.path}") from e

    @staticmethod
    def _to_record(task: Task) -> dict[str, Any]:
        record = task.to_api()
        if task.updated_at is not None:
            record["updatedAt"] = task.updated_at.isoformat()
        return record

    def _index_of(self, tasks: list[Task], task_id: str) -> int:
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return index
        raise NotFoundError("Task not found")

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        tasks = self._read_tasks()
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    async def add(self, task: Task) -> Task:
        """Prepend a task to the stored array."""
        tasks = self._read_tasks()
        if any(existing.id == task.id for existing in tasks):
            raise PersistError(f"Task {task.id} already exists")

        stored = task.model_copy(update={"updated_at": task.created_at})
        self._write_tasks([stored, *tasks])
        return stored

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply the provided fields and rewrite the document."""
        tasks = self._read_tasks()
        index = self._index_of(tasks, task_id)

        changes: dict[str, Any] = {"updated_at": utc_now()}
        if updates.title is not None and updates.title.strip():
            changes["title"] = updates.title.strip()
        if updates.is_done is not None:
            changes["is_done"] = updates.is_done

        tasks[index] = tasks[index].model_copy(update=changes)
        self._write_tasks(tasks)
        return tasks[index]

    async def delete(self, task_id: str) -> Task:
        """Remove a task and rewrite the document."""
        tasks = self._read_tasks()
        index = self._index_of(tasks, task_id)

        removed = tasks.pop(index)
        self._write_tasks(tasks)
        return removed

    async def delete_completed(self) -> int:
        """Remove every completed task and rewrite the document."""
        tasks = self._read_tasks()
        remaining = [task for task in tasks if not task.is_done]
        removed = len(tasks) - len(remaining)
        if removed:
            self._write_tasks(remaining)
        return removed
