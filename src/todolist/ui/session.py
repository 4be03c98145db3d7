"""Interactive task session.

A session owns one task store and one view. Each line the user types is one
intent; the list is redrawn after every intent, successful or not.
"""

from __future__ import annotations

import math
from collections.abc import Awaitable, Callable

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter

from todolist.models import LoadError, TodoListError, ValidationError
from todolist.services.task_store import TaskStore
from todolist.ui.view import TaskListView
from todolist.utils.logger import get_logger
from todolist.utils.task_helpers import resolve_task_ref

Notice = tuple[str, str]

HELP_TEXT = """Commands:
  add <title>          add a task
  toggle <id>          mark a task done / not done
  edit <id> <title>    rename a task
  delete <id>          delete a task (undo stays available for a few seconds)
  undo                 restore the last deleted task
  clear                delete every completed task
  list                 reload the list
  help                 show this help
  quit                 leave the session
Tasks can be referred to by any unique suffix of their ID."""

QUIT_COMMANDS = {"quit", "exit", "q"}


class Session:
    """Interactive loop over a :class:`TaskStore`."""

    def __init__(self, store: TaskStore, view: TaskListView | None = None):
        self.store = store
        self.view = view or TaskListView()
        self.logger = get_logger("ui")
        self._handlers: dict[str, Callable[[str], Awaitable[list[Notice]]]] = {
            "add": self._add,
            "toggle": self._toggle,
            "edit": self._edit,
            "delete": self._delete,
            "undo": self._undo,
            "clear": self._clear,
            "list": self._list,
            "help": self._help,
        }

    def render(self) -> None:
        self.view.render(self.store.tasks, self.store.pending_count, self.store.done_count)

    async def start(self) -> None:
        """Load the initial list and draw it. A failed load is shown, not raised."""
        notices: list[Notice] = []
        try:
            await self.store.load()
        except LoadError as e:
            notices.append((f"Error: {e}", "error"))
        self._show(notices)

    async def dispatch(self, line: str) -> bool:
        """Handle one line of input.

        Returns:
            False when the user asked to leave, True otherwise
        """
        command, _, rest = line.strip().partition(" ")
        command = command.lower()
        if not command:
            return True
        if command in QUIT_COMMANDS:
            return False

        handler = self._handlers.get(command)
        try:
            if handler is None:
                raise ValidationError(f"Unknown command '{command}', type 'help' for a list")
            notices = await handler(rest.strip())
        except TodoListError as e:
            notices = [(f"Error: {e}", "error")]
        except Exception as e:
            self.logger.exception("unexpected error handling %r", line)
            notices = [(f"Error: {e}", "error")]

        self._show(notices)
        return True

    async def run(self) -> None:
        """Read intents until the user quits or closes the input."""
        prompt: PromptSession = PromptSession(
            completer=WordCompleter([*self._handlers, "quit"]),
            bottom_toolbar=self._toolbar,
            refresh_interval=0.5,
        )
        await self.start()
        try:
            while True:
                try:
                    line = await prompt.prompt_async("❯ ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not await self.dispatch(line):
                    break
        finally:
            self.store.close()

    def _show(self, notices: list[Notice]) -> None:
        self.render()
        for message, kind in notices:
            self.view.notify(message, kind)

    def _toolbar(self) -> str:
        pending = self.store.pending_undo
        if pending is None:
            return " Type 'help' for commands"
        seconds = math.ceil(self.store.undo_seconds_left)
        return f' Deleted "{pending.task.title}", type \'undo\' to restore it ({seconds}s)'

    def _resolve(self, ref: str) -> str:
        return resolve_task_ref(self.store.tasks, ref)

    # Intents

    async def _add(self, rest: str) -> list[Notice]:
        await self.store.add(rest)
        return [("Task added", "success")]

    async def _toggle(self, rest: str) -> list[Notice]:
        await self.store.toggle(self._resolve(rest))
        return []

    async def _edit(self, rest: str) -> list[Notice]:
        ref, _, title = rest.partition(" ")
        if await self.store.edit(self._resolve(ref), title) is None:
            return []
        return [("Task updated", "success")]

    async def _delete(self, rest: str) -> list[Notice]:
        deleted = await self.store.delete(self._resolve(rest))
        if deleted is None:
            return []
        return [
            (f'Deleted "{deleted.title}"', "success"),
            (f"Type 'undo' within {self.store.undo_window:g}s to restore it", "info"),
        ]

    async def _undo(self, rest: str) -> list[Notice]:
        if await self.store.undo_delete() is None:
            return [("Nothing to undo", "warning")]
        return [("Task restored", "success")]

    async def _clear(self, rest: str) -> list[Notice]:
        count = await self.store.clear_completed()
        return [(f"Cleared {count} completed task(s)", "success")]

    async def _list(self, rest: str) -> list[Notice]:
        await self.store.load()
        return []

    async def _help(self, rest: str) -> list[Notice]:
        return [(HELP_TEXT, "info")]
