"""HTTP client for the todolist REST API."""

from .client import APIClient, get_client
from .tasks import TasksAPI

__all__ = ["APIClient", "TasksAPI", "get_client"]
