"""Terminal user interface for todolist."""

from .session import Session
from .view import TaskListView

__all__ = ["Session", "TaskListView"]
