"""SQLite implementation of TaskRepository."""

from __future__ import annotations

import sqlite3
import time

from todolist.adapters.sqlite.connection import get_connection
from todolist.adapters.sqlite.schema import TASK_COLUMNS
from todolist.adapters.sqlite.utils import row_to_task, update_assignments
from todolist.models import NotFoundError, Task, TaskUpdate
from todolist.repositories import TaskRepository
from todolist.utils.logger import get_logger


class SqliteTaskRepository(TaskRepository):
    """Tasks stored in the ``tasks`` table.

    Every statement is parameterized; column names are the only text
    interpolated into SQL and they never come from user input.
    """

    def __init__(
        self,
        db_path: str | None = None,
        connection: sqlite3.Connection | None = None,
    ):
        """Initialize SQLite task repository.

        Args:
            db_path: Database file. If None, the shared default database is used.
            connection: Already migrated connection to use instead.
        """
        self.db_path = db_path
        self._connection = connection
        self.logger = get_logger("sqlite")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            self._connection = get_connection(self.db_path)
        return self._connection

    def _execute(self, sql: str, params: tuple | list = ()) -> sqlite3.Cursor:
        """Execute one statement, logging its duration and affected rows."""
        start = time.monotonic()
        try:
            cursor = self.connection.execute(sql, params)
        except sqlite3.Error:
            self.logger.exception("database query error: %s", sql)
            self.connection.rollback()
            raise
        elapsed_ms = (time.monotonic() - start) * 1000
        self.logger.debug(
            "executed query %s (%.1fms, rows=%s)", sql, elapsed_ms, cursor.rowcount
        )
        return cursor

    async def list_all(self) -> list[Task]:
        """List all tasks, newest first."""
        cursor = self._execute(
            f"SELECT {TASK_COLUMNS} FROM tasks ORDER BY created_at DESC, id DESC"
        )
        return [row_to_task(row) for row in cursor.fetchall()]

    async def get(self, task_id: str) -> Task:
        row = self._execute(
            f"SELECT {TASK_COLUMNS} FROM tasks WHERE id = ?", (task_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError("Task not found")
        return row_to_task(row)

    async def add(self, task: Task) -> Task:
        """Insert a task; both timestamps start at its creation time."""
        created_at = task.created_at.isoformat()
        self._execute(
            f"INSERT INTO tasks ({TASK_COLUMNS}) VALUES (?, ?, ?, ?, ?)",
            (task.id, task.title, task.is_done, created_at, created_at),
        )
        self.connection.commit()
        return await self.get(task.id)

    async def update(self, task_id: str, updates: TaskUpdate) -> Task:
        """Apply the provided fields and bump updated_at."""
        assignments, params = update_assignments(updates)
        cursor = self._execute(
            f"UPDATE tasks SET {assignments} WHERE id = ?", [*params, task_id]
        )
        if cursor.rowcount == 0:
            raise NotFoundError("Task not found")

        self.connection.commit()
        return await self.get(task_id)

    async def delete(self, task_id: str) -> Task:
        """Delete a task and return the removed record."""
        task = await self.get(task_id)

        cursor = self._execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        if cursor.rowcount == 0:
            raise NotFoundError("Task not found")

        self.connection.commit()
        return task

    async def delete_completed(self) -> int:
        cursor = self._execute("DELETE FROM tasks WHERE is_done = ?", (True,))
        self.connection.commit()
        return cursor.rowcount
