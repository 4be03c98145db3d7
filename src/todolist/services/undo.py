"""Undo window for deleted tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass

from todolist.models import Task


@dataclass(eq=False)
class PendingUndo:
    """A deleted task that can still be restored.

    Records are compared by identity: a countdown only clears the record it
    was started for.
    """

    task: Task
    index: int


class UndoCountdown:
    """Cancellable timer bound to one :class:`PendingUndo` record."""

    def __init__(
        self,
        record: PendingUndo,
        delay: float,
        on_expire: Callable[[PendingUndo], None],
    ):
        self.record = record
        self.delay = delay
        self._on_expire = on_expire
        self._handle: asyncio.TimerHandle | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self.expired = False
        self.cancelled = False

    def start(self) -> None:
        """Schedule expiry on the running event loop."""
        self._loop = asyncio.get_running_loop()
        self._handle = self._loop.call_later(self.delay, self._fire)

    def cancel(self) -> None:
        """Stop the countdown. Safe to call more than once."""
        if self.cancelled or self.expired:
            return
        self.cancelled = True
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    @property
    def active(self) -> bool:
        return self._handle is not None and not (self.cancelled or self.expired)

    @property
    def remaining(self) -> float:
        """Seconds left before expiry, 0 once it is no longer active."""
        if not self.active:
            return 0.0
        return max(0.0, self._handle.when() - self._loop.time())

    def _fire(self) -> None:
        self._handle = None
        if self.cancelled:
            return
        self.expired = True
        self._on_expire(self.record)
