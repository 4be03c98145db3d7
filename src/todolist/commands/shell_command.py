"""Command 'shell' of todolist: interactive session with undo."""

import typer

from todolist.ui.console import get_console
from todolist.ui.session import Session
from todolist.ui.view import TaskListView

from .decorators import command_wrapper
from .utils import open_task_store

app = typer.Typer()
console = get_console()


@app.command("shell")
@command_wrapper
async def shell() -> None:
    """Start an interactive session (add, toggle, edit, delete, undo)."""
    async with open_task_store(load=False) as store:
        await Session(store, TaskListView(console)).run()
