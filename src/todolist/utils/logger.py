"""Application logger.

Everything the app logs goes to one rotating file under platformdirs'
``user_log_dir``; the terminal stays reserved for the UI. Components ask for a
child logger (``todolist.sqlite``, ``todolist.server``...) which inherits the
file handler. ``TODOLIST_LOG_LEVEL`` overrides the level.
"""

from __future__ import annotations

import logging
import logging.handlers
import os
from pathlib import Path

from platformdirs import user_log_dir

APP_NAME = "todolist"
LOG_FILE_NAME = "todolist.log"
LOG_LEVEL_ENV = "TODOLIST_LOG_LEVEL"
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUPS = 3

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    return Path(user_log_dir(APP_NAME)) / LOG_FILE_NAME


def _level_from_env() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "DEBUG").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.DEBUG


def _has_file_handler(logger: logging.Logger, filename: str) -> bool:
    return any(
        isinstance(h, logging.handlers.RotatingFileHandler) and h.baseFilename == filename
        for h in logger.handlers
    )


def _configure() -> logging.Logger:
    path = log_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        path, maxBytes=MAX_LOG_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    )

    logger = logging.getLogger(APP_NAME)
    logger.setLevel(_level_from_env())
    # Other handlers (capture, console) may already be attached
    if not _has_file_handler(logger, handler.baseFilename):
        logger.addHandler(handler)
    else:
        handler.close()
    logger.propagate = False
    return logger


def get_logger(component: str | None = None) -> logging.Logger:
    """Return the application logger, or a child of it for *component*.

    The file handler is attached on first use.
    """
    global _logger
    if _logger is None:
        _logger = _configure()
    if component:
        return _logger.getChild(component)
    return _logger
