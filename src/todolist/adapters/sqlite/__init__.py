"""SQLite adapter module - relational task table storage."""

from todolist.adapters.sqlite.connection import DatabaseConnection, get_connection
from todolist.adapters.sqlite.task_repository import SqliteTaskRepository

__all__ = [
    "SqliteTaskRepository",
    "DatabaseConnection",
    "get_connection",
]
