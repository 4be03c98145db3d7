"""Tasks API endpoints."""

from typing import Any

from todolist.api.client import APIClient
from todolist.models import TransportError


def _data(payload: dict) -> dict:
    data = payload.get("data")
    if not isinstance(data, dict):
        raise TransportError("Response is missing the task record")
    return data


class TasksAPI:
    """Tasks API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> list[dict]:
        """List every task, newest first."""
        payload = await self.client.get("/api/tasks")
        return payload.get("data") or []

    async def create_task(self, title: str) -> dict:
        """Create a new task."""
        payload = await self.client.post("/api/tasks", json={"title": title})
        return _data(payload)

    async def update_task(self, task_id: str, **updates: Any) -> dict:
        """Update a task (``title`` and/or ``isDone``)."""
        payload = await self.client.put(f"/api/tasks/{task_id}", json=updates)
        return _data(payload)

    async def delete_task(self, task_id: str) -> dict:
        """Delete a task and return the removed record."""
        payload = await self.client.delete(f"/api/tasks/{task_id}")
        return _data(payload)

    async def clear_completed(self) -> int:
        """Delete every completed task."""
        payload = await self.client.delete("/api/tasks-completed")
        return int(payload.get("deletedCount", 0))
