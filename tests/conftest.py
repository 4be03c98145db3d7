"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from real filesystem/API state.
"""

from __future__ import annotations

import logging
import logging.handlers
import sqlite3
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest

from todolist.adapters.sqlite.migrations import MigrationRunner
from todolist.adapters.sqlite.migrations.m001_initial_schema import ALL_MIGRATIONS
from todolist.adapters.sqlite.task_repository import SqliteTaskRepository
from todolist.models import Task


# ---------------------------------------------------------------------------
# Logging and config isolation
# ---------------------------------------------------------------------------


def _drop_file_handlers() -> None:
    logger = logging.getLogger("todolist")
    for handler in list(logger.handlers):
        if isinstance(handler, logging.handlers.RotatingFileHandler):
            logger.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolated_logger(tmp_path_factory):
    """Send the application log to a temp directory for every test."""
    import todolist.utils.logger as logger_mod

    log_dir = str(tmp_path_factory.mktemp("logs"))
    logger_mod._logger = None
    _drop_file_handlers()
    with patch("todolist.utils.logger.user_log_dir", return_value=log_dir):
        yield log_dir
    _drop_file_handlers()
    logger_mod._logger = None


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory.

    Patches platform dirs so config/data files land in *tmp_path* only.
    Also clears the lru_cache so each test gets a fresh service instance.
    """
    from todolist.services.config_service import get_config_service

    tmpdir = str(tmp_path)
    get_config_service.cache_clear()
    with patch("todolist.services.config_service.user_config_dir", return_value=tmpdir):
        with patch("todolist.services.config_service.user_data_dir", return_value=tmpdir):
            # Prime the cache so every caller shares this instance
            yield get_config_service()
    get_config_service.cache_clear()


# ---------------------------------------------------------------------------
# Repositories
# ---------------------------------------------------------------------------


def _create_in_memory_db() -> sqlite3.Connection:
    """Create an in-memory SQLite database with the migrated schema."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    MigrationRunner(conn).run(ALL_MIGRATIONS)
    return conn


@pytest.fixture
def db():
    """Provide a fresh in-memory task database."""
    conn = _create_in_memory_db()
    yield conn
    conn.close()


@pytest.fixture
def sqlite_repo(db):
    """SqliteTaskRepository bound to the in-memory database."""
    return SqliteTaskRepository(connection=db)


def build_task(task_id: str, title: str, *, is_done: bool = False, minutes_ago: int = 0) -> Task:
    """Build a task created *minutes_ago* minutes before now."""
    return Task(
        id=task_id,
        title=title,
        is_done=is_done,
        created_at=datetime.now(UTC) - timedelta(minutes=minutes_ago),
    )


@pytest.fixture
def make_task():
    """Factory fixture building Task objects."""
    return build_task
