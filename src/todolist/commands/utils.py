"""Shared helpers for commands."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from todolist.services.task_store import TaskStore, get_task_store


@asynccontextmanager
async def open_task_store(*, load: bool = True) -> AsyncIterator[TaskStore]:
    """Yield a task store on the configured backend and release it afterwards."""
    store = get_task_store()
    try:
        if load:
            await store.load()
        yield store
    finally:
        store.close()
        await store.repository.close()
