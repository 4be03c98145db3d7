"""todolist - a single-user to-do list manager."""

__version__ = "1.0.0"
