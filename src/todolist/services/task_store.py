"""Task store - the in-memory task list of one session.

The store owns the ordered task sequence (newest first), routes every
mutation through a :class:`~todolist.repositories.TaskRepository` and
implements optimistic delete with a timed undo window.
"""

from __future__ import annotations

from todolist.models import (
    LoadError,
    NotFoundError,
    PersistError,
    Task,
    TaskUpdate,
)
from todolist.repositories import TaskRepository
from todolist.services.undo import PendingUndo, UndoCountdown
from todolist.utils.logger import get_logger
from todolist.utils.task_helpers import generate_task_id, normalize_title, utc_now

DEFAULT_UNDO_SECONDS = 4.0


class TaskStore:
    """In-memory task list kept in sync with a persistence backend.

    Only one task can be pending undo at a time; deleting another task
    forgets the previous one.
    """

    def __init__(self, repository: TaskRepository, undo_window: float = DEFAULT_UNDO_SECONDS):
        """Initialize the task store.

        Args:
            repository: Backend every mutation goes through
            undo_window: Seconds a deleted task stays restorable
        """
        self.repository = repository
        self.undo_window = undo_window
        self._tasks: list[Task] = []
        self._pending: PendingUndo | None = None
        self._countdown: UndoCountdown | None = None
        self.logger = get_logger("store")

    # Derived state

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._tasks if not task.is_done)

    @property
    def done_count(self) -> int:
        return sum(1 for task in self._tasks if task.is_done)

    @property
    def pending_undo(self) -> PendingUndo | None:
        return self._pending

    @property
    def undo_seconds_left(self) -> float:
        if self._countdown is None:
            return 0.0
        return self._countdown.remaining

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _index_of(self, task_id: str) -> int | None:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def _backend_failure(self, message: str, error: Exception) -> PersistError:
        self.logger.error("%s: %s", message, error, exc_info=error)
        if isinstance(error, PersistError):
            return type(error)(str(error))
        return PersistError(message)

    # Operations

    async def load(self) -> list[Task]:
        """Replace the in-memory list with the backend's tasks.

        Raises:
            LoadError: If the backend fails; the list is left empty
        """
        try:
            tasks = await self.repository.list_all()
        except Exception as e:
            self._tasks = []
            self.logger.error("error loading tasks: %s", e, exc_info=e)
            raise LoadError(f"Failed to load tasks: {e}") from e

        self._tasks = list(tasks)
        self.logger.debug("loaded %d tasks", len(self._tasks))
        return list(self._tasks)

    async def add(self, title: str) -> Task:
        """Create a task and prepend the backend's canonical record.

        Raises:
            ValidationError: If the trimmed title is empty
            PersistError: If the backend rejects the task
        """
        task = self._new_task(normalize_title(title))
        try:
            stored = await self.repository.add(task)
        except Exception as e:
            raise self._backend_failure("Failed to add task", e) from e

        self._tasks.insert(0, stored)
        self.logger.info("added task %s", stored.id)
        return stored

    async def toggle(self, task_id: str) -> Task | None:
        """Flip a task's completion status. Unknown ids are ignored."""
        task = self.get(task_id)
        if task is None:
            return None

        try:
            updated = await self.repository.update(
                task_id, TaskUpdate(is_done=not task.is_done)
            )
        except NotFoundError:
            raise
        except Exception as e:
            raise self._backend_failure("Failed to update task", e) from e

        return self._replace(task_id, is_done=updated.is_done)

    async def edit(self, task_id: str, new_title: str) -> Task | None:
        """Rename a task. Unknown ids are ignored.

        Raises:
            ValidationError: If the trimmed title is empty
            PersistError: If the backend rejects the change
        """
        title = normalize_title(new_title)
        if self.get(task_id) is None:
            return None

        try:
            updated = await self.repository.update(task_id, TaskUpdate(title=title))
        except NotFoundError:
            raise
        except Exception as e:
            raise self._backend_failure("Failed to update task", e) from e

        return self._replace(task_id, title=updated.title)

    async def delete(self, task_id: str) -> Task | None:
        """Optimistically remove a task and open the undo window.

        The task disappears from the list before the backend answers. If the
        backend fails it is put back where it was and PersistError is raised.
        """
        index = self._index_of(task_id)
        if index is None:
            return None

        task = self._tasks[index]
        record = PendingUndo(task=task, index=index)
        self._supersede(record)
        del self._tasks[index]

        try:
            await self.repository.delete(task_id)
        except NotFoundError:
            # Already gone in the backend
            self.logger.info("task %s was already deleted", task_id)
        except Exception as e:
            self._tasks.insert(min(index, len(self._tasks)), task)
            if self._pending is record:
                self._pending = None
            raise self._backend_failure("Failed to delete task", e) from e

        if self._pending is record:
            self._countdown = UndoCountdown(record, self.undo_window, self._on_undo_expired)
            self._countdown.start()
        self.logger.info("deleted task %s", task_id)
        return task

    async def undo_delete(self) -> Task | None:
        """Restore the most recently deleted task as a new entity.

        The restored task gets a new id and creation time and is not done.
        On failure the undo record is kept so the user can try again.
        """
        record = self._pending
        if record is None:
            return None

        task = self._new_task(record.task.title)
        try:
            stored = await self.repository.add(task)
        except Exception as e:
            raise self._backend_failure("Failed to restore task", e) from e

        self._tasks.insert(min(record.index, len(self._tasks)), stored)
        if self._countdown is not None and self._countdown.record is record:
            self._countdown.cancel()
            self._countdown = None
        if self._pending is record:
            self._pending = None
        self.logger.info("restored task %s as %s", record.task.id, stored.id)
        return stored

    async def clear_completed(self) -> int:
        """Delete every completed task. Returns how many were removed."""
        try:
            count = await self.repository.delete_completed()
        except Exception as e:
            raise self._backend_failure("Failed to clear completed tasks", e) from e

        self._tasks = [task for task in self._tasks if not task.is_done]
        self.logger.info("cleared %d completed tasks", count)
        return count

    def close(self) -> None:
        """Cancel the outstanding undo countdown, if any."""
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        self._pending = None

    # Internals

    @staticmethod
    def _new_task(title: str) -> Task:
        return Task(id=generate_task_id(), title=title, is_done=False, created_at=utc_now())

    def _replace(self, task_id: str, **changes) -> Task | None:
        index = self._index_of(task_id)
        if index is None:
            return None
        self._tasks[index] = self._tasks[index].model_copy(update=changes)
        return self._tasks[index]

    def _supersede(self, record: PendingUndo) -> None:
        if self._countdown is not None:
            self._countdown.cancel()
            self._countdown = None
        self._pending = record

    def _on_undo_expired(self, record: PendingUndo) -> None:
        if self._pending is record:
            self._pending = None
            self._countdown = None
            self.logger.debug("undo window closed for task %s", record.task.id)


def get_task_store() -> TaskStore:
    """Build a task store on the configured storage backend."""
    from todolist.services.config_service import get_config_service

    config_service = get_config_service()
    return TaskStore(
        config_service.storage_strategy_context.task_repository,
        undo_window=config_service.config.ui.undo_seconds,
    )
