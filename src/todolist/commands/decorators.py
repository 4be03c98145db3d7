"""Decorators for command functions."""

import asyncio
import functools
import time
from collections.abc import Callable

import typer

from todolist.models import NotFoundError, PersistError, TodoListError, ValidationError
from todolist.ui.formatters import format_error
from todolist.utils.exit_codes import ExitCode, describe
from todolist.utils.logger import get_logger


def exit_code_for(error: TodoListError) -> ExitCode:
    """Map an application error to its exit code."""
    if isinstance(error, ValidationError):
        return ExitCode.INVALID_ARGS
    if isinstance(error, NotFoundError):
        return ExitCode.NOT_FOUND
    if isinstance(error, PersistError):
        return ExitCode.BACKEND
    return ExitCode.GENERAL


def command_wrapper(func: Callable):
    """Run a command (sync or async), log its outcome and map errors to exit codes."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger = get_logger("cli")
        cmd = func.__name__
        start = time.monotonic()
        logger.info("command started: %s", cmd)
        try:
            if asyncio.iscoroutinefunction(func):
                result = asyncio.run(func(*args, **kwargs))
            else:
                result = func(*args, **kwargs)
        except TodoListError as e:
            code = exit_code_for(e)
            logger.error(
                "command failed: %s (%.3fs) - %s [%s]",
                cmd,
                time.monotonic() - start,
                e,
                describe(code),
            )
            format_error(str(e))
            raise typer.Exit(code=code) from e
        except typer.Exit:
            # --help, confirmations declined, explicit exits
            raise
        except Exception as e:
            logger.exception("command crashed: %s (%.3fs)", cmd, time.monotonic() - start)
            format_error(f"An unexpected error occurred: {e}")
            raise typer.Exit(code=ExitCode.GENERAL) from e

        logger.info("command completed: %s (%.3fs)", cmd, time.monotonic() - start)
        return result

    return wrapper
