"""Adapters module - Repository implementations for different storage backends.

This package contains concrete implementations (adapters) for the repository
interface:
- local_store: single JSON document under one well-known key
- sqlite: relational ``tasks`` table
- rest_api: remote REST API backend
"""

from .local_store import LocalStoreTaskRepository
from .rest_api import RestApiTaskRepository
from .sqlite import SqliteTaskRepository

__all__ = [
    "LocalStoreTaskRepository",
    "SqliteTaskRepository",
    "RestApiTaskRepository",
]
