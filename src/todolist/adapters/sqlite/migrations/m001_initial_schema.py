"""Migration 001: the tasks table and its indexes."""

from todolist.adapters.sqlite import schema

from .runner import Migration

INITIAL_SCHEMA = Migration(
    version=1,
    description="Create tasks table",
    statements=(schema.TASKS_TABLE, *schema.TASK_INDEXES),
)

ALL_MIGRATIONS = (INITIAL_SCHEMA,)
