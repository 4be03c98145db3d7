"""Services module for todolist - Business logic layer."""

from .task_service import TaskService
from .task_store import TaskStore
from .undo import PendingUndo, UndoCountdown

__all__ = [
    "TaskStore",
    "TaskService",
    "PendingUndo",
    "UndoCountdown",
]
