"""Process-wide connection to the task database.

The server opens the database once at startup and every request reuses the
same connection. Opening a new path closes the previous one.
"""

from __future__ import annotations

import atexit
import sqlite3
from pathlib import Path

from platformdirs import user_data_dir

from todolist.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from todolist.adapters.sqlite.migrations.runner import MigrationRunner
from todolist.utils.logger import get_logger

MEMORY = ":memory:"
LOCK_TIMEOUT = 30.0


def default_db_path() -> Path:
    return Path(user_data_dir("todolist")) / "todo.db"


class DatabaseConnection:
    """Holds the one open connection and the path it was opened with."""

    _connection: sqlite3.Connection | None = None
    _db_path: Path | None = None
    _atexit_registered: bool = False

    @classmethod
    def get_connection(cls, db_path: str | Path | None = None) -> sqlite3.Connection:
        """Return the shared connection, opening and migrating it if needed.

        Args:
            db_path: Database file, or ``":memory:"`` for a private in-memory
                database. Defaults to ``todo.db`` in the user data dir.
        """
        path = default_db_path() if db_path is None else Path(db_path)
        if cls._connection is not None and cls._db_path == path:
            return cls._connection
        if cls._connection is not None:
            cls.close_connection()

        connection = cls._open(path)
        MigrationRunner(connection).run(ALL_MIGRATIONS)

        cls._connection = connection
        cls._db_path = path
        get_logger("sqlite").info("opened task database at %s", path)

        if not cls._atexit_registered:
            atexit.register(cls.close_connection)
            cls._atexit_registered = True
        return connection

    @staticmethod
    def _open(path: Path) -> sqlite3.Connection:
        in_memory = str(path) == MEMORY
        if not in_memory:
            path.parent.mkdir(parents=True, exist_ok=True)

        # Requests are served from the event loop and from worker threads
        connection = sqlite3.connect(str(path), check_same_thread=False, timeout=LOCK_TIMEOUT)
        connection.row_factory = sqlite3.Row
        if not in_memory:
            connection.execute("PRAGMA journal_mode = WAL")
        return connection

    @classmethod
    def close_connection(cls) -> None:
        """Commit and close the shared connection, if one is open."""
        if cls._connection is None:
            return
        try:
            cls._connection.commit()
            cls._connection.close()
        except sqlite3.Error as e:
            get_logger("sqlite").warning("error closing task database: %s", e)
        finally:
            cls._connection = None
            cls._db_path = None


def get_connection(db_path: str | Path | None = None) -> sqlite3.Connection:
    return DatabaseConnection.get_connection(db_path)
