"""Custom exceptions for todolist."""


class TodoListError(Exception):
    """Base exception for all todolist errors."""


class ValidationError(TodoListError):
    """Raised when user input is rejected before any backend call."""


class NotFoundError(TodoListError):
    """Raised when a task id has no matching task."""


class PersistError(TodoListError):
    """Raised when a persistence backend call fails."""


class LoadError(PersistError):
    """Raised when the task list could not be loaded from the backend."""


class TransportError(PersistError):
    """Raised when the server answers with a malformed or non-JSON body."""
