"""Task service - Business logic behind the REST endpoints.

This service layer sits between the HTTP routes and the repository, so the
routes only translate between JSON envelopes and these calls.
"""

from __future__ import annotations

from todolist.models import Task, TaskUpdate
from todolist.repositories import TaskRepository
from todolist.utils.task_helpers import generate_task_id, normalize_title, utc_now


class TaskService:
    """Service for server-side task operations.

    The server is the authority for ids and creation timestamps: clients only
    send titles.
    """

    def __init__(self, task_repository: TaskRepository):
        """Initialize the task service.

        Args:
            task_repository: TaskRepository implementation for data access
        """
        self.repository = task_repository

    async def list_tasks(self) -> list[Task]:
        """List every task, newest first."""
        return await self.repository.list_all()

    async def create_task(self, title: str | None) -> Task:
        """Create a new task.

        Raises:
            ValidationError: If the trimmed title is empty
        """
        task = Task(
            id=generate_task_id(),
            title=normalize_title(title),
            is_done=False,
            created_at=utc_now(),
        )
        return await self.repository.add(task)

    async def update_task(
        self,
        task_id: str,
        *,
        title: str | None = None,
        is_done: bool | None = None,
    ) -> Task:
        """Update a task. A blank title is ignored rather than rejected.

        Raises:
            NotFoundError: If no task has this id
        """
        if title is not None:
            title = title.strip() or None
        return await self.repository.update(task_id, TaskUpdate(title=title, is_done=is_done))

    async def delete_task(self, task_id: str) -> Task:
        """Delete a task and return it.

        Raises:
            NotFoundError: If no task has this id
        """
        return await self.repository.delete(task_id)

    async def clear_completed(self) -> int:
        """Delete every completed task and return how many were removed."""
        return await self.repository.delete_completed()
