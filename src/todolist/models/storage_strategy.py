"""Storage backend selection.

The backend is picked once from configuration. The task store only ever sees
the :class:`TaskRepository` the chosen strategy builds.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from todolist.models.config_models import AppConfig
from todolist.repositories import TaskRepository


class StorageStrategy(ABC):
    """Builds, and then keeps, the repository of one storage backend."""

    storage_type: str = ""

    def __init__(self) -> None:
        self._task_repo: TaskRepository | None = None

    @abstractmethod
    def _build_repository(self) -> TaskRepository: ...

    def get_task_repository(self) -> TaskRepository:
        if self._task_repo is None:
            self._task_repo = self._build_repository()
        return self._task_repo


class LocalStorageStrategy(StorageStrategy):
    """Tasks live in one JSON document under a well-known key."""

    storage_type = "local"

    def __init__(self, path: str | None = None, key: str = "todo_tasks"):
        super().__init__()
        self.path = path
        self.key = key

    def _build_repository(self) -> TaskRepository:
        from todolist.adapters.local_store import LocalStoreTaskRepository

        return LocalStoreTaskRepository(path=self.path, key=self.key)


class SqliteStorageStrategy(StorageStrategy):
    """Tasks live in the sqlite ``tasks`` table the REST server also uses."""

    storage_type = "sqlite"

    def __init__(self, db_path: str | None = None):
        super().__init__()
        self.db_path = db_path

    def _build_repository(self) -> TaskRepository:
        from todolist.adapters.sqlite.task_repository import SqliteTaskRepository

        return SqliteTaskRepository(db_path=self.db_path)


class RemoteStorageStrategy(StorageStrategy):
    """Tasks are persisted by a todolist server over HTTP."""

    storage_type = "remote"

    def __init__(self, endpoint: str, timeout: float = 30):
        super().__init__()
        self.endpoint = endpoint
        self.timeout = timeout

    def _build_repository(self) -> TaskRepository:
        from todolist.adapters.rest_api import RestApiTaskRepository
        from todolist.api.client import APIClient

        return RestApiTaskRepository(APIClient(self.endpoint, timeout=self.timeout))


class StorageStrategyContext:
    """Holds the active storage strategy for the lifetime of the process."""

    def __init__(self, strategy: StorageStrategy):
        self.strategy = strategy

    @property
    def task_repository(self) -> TaskRepository:
        return self.strategy.get_task_repository()

    @property
    def storage_type(self) -> str:
        return self.strategy.storage_type


def create_storage_strategy(config: AppConfig) -> StorageStrategy:
    """Build the strategy selected by ``config.storage.type``."""
    storage = config.storage
    if storage.type == "remote":
        return RemoteStorageStrategy(config.api.endpoint, timeout=config.api.timeout)
    if storage.type == "sqlite":
        return SqliteStorageStrategy(db_path=config.server.db_path)
    return LocalStorageStrategy(path=storage.path, key=storage.key)
