"""Process exit codes for the todolist CLI.

Scripts can tell what went wrong without parsing output.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    GENERAL = 1
    # Bad arguments or an invalid title
    INVALID_ARGS = 2
    # Storage backend or server failed
    BACKEND = 4
    NOT_FOUND = 5

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    ExitCode.SUCCESS: "Command executed successfully",
    ExitCode.GENERAL: "Unexpected error",
    ExitCode.INVALID_ARGS: "Invalid arguments or task title",
    ExitCode.BACKEND: "Storage backend error, check the log file",
    ExitCode.NOT_FOUND: "Task not found",
}


def describe(code: int) -> str:
    """Return a one-line description of *code*, including unknown ones."""
    try:
        return ExitCode(code).description
    except ValueError:
        return f"Unknown exit code {code}"
