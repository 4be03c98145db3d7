"""Repository interfaces.

This package contains the abstract base class that defines the contract for
task persistence. This is the "Port" in the Hexagonal Architecture.

Implementations (Adapters) are in:
- todolist.adapters.local_store (single JSON document)
- todolist.adapters.sqlite (relational table)
- todolist.adapters.rest_api (remote REST API)
"""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
