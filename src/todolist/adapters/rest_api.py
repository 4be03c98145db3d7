"""REST API adapter - Repository implementation using the todolist REST API.

This adapter wraps the API client to implement the repository interface, so
the task store can persist through the relational server exactly as it does
through the local document store.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError

from todolist.api.client import APIClient
from todolist.api.tasks import TasksAPI
from todolist.models import Task, TaskUpdate, TransportError
from todolist.repositories import TaskRepository


class RestApiTaskRepository(TaskRepository):
    """Task repository implementation using the REST API."""

    def __init__(self, client: APIClient | None = None):
        """Initialize REST API task repository.

        Args:
            client: APIClient to use. If None, one is built from the current
                configuration on first use.
        """
        self._client = client
        self._tasks_api: TasksAPI | None = None

    @property
    def tasks_api(self) -> TasksAPI:
        """Get or create TasksAPI instance."""
        if self._tasks_api is None:
            if self._client is None:
                from todolist.api.client import get_client

                self._client = get_client()
            self._tasks_api = TasksAPI(self._client)
        return self._tasks_api

    @staticmethod
    def _to_task(task_dict: dict) -> Task:
        try:
            return Task.model_validate(task_dict)
        except PydanticValidationError as e:
            raise TransportError("Malformed task record from server") from e

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        if self._client is not None:
            await self._client.close()

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first (server order)."""
        result = await self.tasks_api.list_tasks()
        if not isinstance(result, list):
            raise TransportError("Malformed task list from server")
        return [self._to_task(task_dict) for task_dict in result]

    async def add(self, task: Task) -> Task:
        """Create a task; the server assigns the canonical id and timestamp."""
        result = await self.tasks_api.create_task(task.title)
        return self._to_task(result)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Update an existing task."""
        result = await self.tasks_api.update_task(task_id, **updates.to_api())
        return self._to_task(result)

    async def delete(self, task_id: str) -> Task:
        """Delete a task."""
        result = await self.tasks_api.delete_task(task_id)
        return self._to_task(result)

    async def delete_completed(self) -> int:
        """Delete every completed task."""
        return await self.tasks_api.clear_completed()
