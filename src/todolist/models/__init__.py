"""todolist domain models.

This package contains Pydantic models that represent the core domain entities
of the application, plus the exception hierarchy shared by every layer.
"""

from .config_models import AppConfig
from .core import Task, TaskUpdate
from .exceptions import (
    LoadError,
    NotFoundError,
    PersistError,
    TodoListError,
    TransportError,
    ValidationError,
)

__all__ = [
    # Task models
    "Task",
    "TaskUpdate",
    # Config models
    "AppConfig",
    # Errors
    "TodoListError",
    "ValidationError",
    "NotFoundError",
    "PersistError",
    "LoadError",
    "TransportError",
]
