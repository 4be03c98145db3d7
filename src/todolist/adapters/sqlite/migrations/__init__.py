"""Schema migrations for the sqlite task table."""

from .runner import Migration, MigrationRunner

__all__ = ["Migration", "MigrationRunner"]
