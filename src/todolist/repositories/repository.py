"""Persistence port for tasks.

The task store and the server both talk to a :class:`TaskRepository`; the
local document, the sqlite table and the remote API are adapters behind it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todolist.models import Task, TaskUpdate


class TaskRepository(ABC):
    """Async contract every task backend implements.

    Backends raise :class:`~todolist.models.NotFoundError` for unknown ids and
    :class:`~todolist.models.PersistError` (or a subclass) when they fail.
    """

    @abstractmethod
    async def list_all(self) -> list[Task]:
        """Every task, newest first."""

    @abstractmethod
    async def add(self, task: Task) -> Task:
        """Persist a new task built by the caller.

        Returns:
            The record as stored. Backends that assign their own identity
            (the REST API) may return a different id.
        """

    @abstractmethod
    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply the fields set on *updates* and return the stored record."""

    @abstractmethod
    async def delete(self, task_id: str) -> Task:
        """Remove a task and return it."""

    @abstractmethod
    async def delete_completed(self) -> int:
        """Remove every completed task and return how many went."""

    async def close(self) -> None:
        """Release backend resources. Backends without any keep the default."""
