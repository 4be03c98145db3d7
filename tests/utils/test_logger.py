"""Tests for the application logger utility."""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from todolist.utils.logger import get_logger


def test_get_logger_creates_log_file(isolated_logger):
    logger = get_logger()

    assert isinstance(logger, logging.Logger)
    assert logger.name == "todolist"
    assert (Path(isolated_logger) / "todolist.log").exists()


def test_get_logger_returns_singleton():
    assert get_logger() is get_logger()


def test_get_logger_writes_message(isolated_logger):
    logger = get_logger()
    logger.info("hello from test")
    for handler in logger.handlers:
        handler.flush()

    content = (Path(isolated_logger) / "todolist.log").read_text()
    assert "hello from test" in content
    assert "INFO" in content


def test_logger_does_not_propagate_to_root():
    assert get_logger().propagate is False


def _file_handlers():
    return [
        h
        for h in logging.getLogger("todolist").handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
    ]


def test_single_rotating_handler():
    get_logger()
    get_logger("sqlite")
    handlers = _file_handlers()

    assert len(handlers) == 1
    assert handlers[0].maxBytes == 5 * 1024 * 1024
    assert handlers[0].backupCount == 3


def test_component_logger_is_child_of_app_logger(isolated_logger):
    child = get_logger("sqlite")
    child.warning("from a component")
    for handler in get_logger().handlers:
        handler.flush()

    assert child.name == "todolist.sqlite"
    content = (Path(isolated_logger) / "todolist.log").read_text()
    assert "[todolist.sqlite] from a component" in content


def test_level_can_be_set_from_environment(monkeypatch):
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "warning")

    assert get_logger().level == logging.WARNING


def test_unknown_level_name_falls_back_to_debug(monkeypatch):
    monkeypatch.setenv("TODOLIST_LOG_LEVEL", "chatty")

    assert get_logger().level == logging.DEBUG


def test_file_handler_added_next_to_foreign_handlers(isolated_logger):
    app_logger = logging.getLogger("todolist")
    capture = logging.NullHandler()
    app_logger.addHandler(capture)
    try:
        logger = get_logger()
        logger.info("still reaches the file")
        for handler in _file_handlers():
            handler.flush()

        assert len(_file_handlers()) == 1
        content = (Path(isolated_logger) / "todolist.log").read_text()
        assert "still reaches the file" in content
    finally:
        app_logger.removeHandler(capture)


def test_reconfiguring_same_file_does_not_duplicate_handler():
    import todolist.utils.logger as logger_mod

    get_logger()
    logger_mod._logger = None
    get_logger()

    assert len(_file_handlers()) == 1
