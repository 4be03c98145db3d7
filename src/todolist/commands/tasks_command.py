"""One-shot task commands: list, add, toggle, edit, delete, clear-completed."""

import typer

from todolist.ui.console import get_console
from todolist.ui.formatters import format_info, format_success
from todolist.ui.view import TaskListView
from todolist.utils.task_helpers import resolve_task_ref

from .decorators import command_wrapper
from .utils import open_task_store

app = typer.Typer(help="Task commands")
console = get_console()


@app.command("list")
@command_wrapper
async def list_tasks() -> None:
    """Show every task, newest first."""
    async with open_task_store() as store:
        TaskListView(console).render(store.tasks, store.pending_count, store.done_count)


@app.command("add")
@command_wrapper
async def add(
    title: str = typer.Argument(..., help="Task title"),
) -> None:
    """Add a task."""
    async with open_task_store() as store:
        task = await store.add(title)
    format_success(f"Task added: {task.title} ({task.id})")


@app.command("toggle")
@command_wrapper
async def toggle(
    ref: str = typer.Argument(..., help="Task ID or unique suffix"),
) -> None:
    """Mark a task done, or not done again."""
    async with open_task_store() as store:
        task = await store.toggle(resolve_task_ref(store.tasks, ref))
    if task is not None:
        state = "done" if task.is_done else "not done"
        format_success(f"Task marked as {state}: {task.title}")


@app.command("edit")
@command_wrapper
async def edit(
    ref: str = typer.Argument(..., help="Task ID or unique suffix"),
    title: str = typer.Argument(..., help="New title"),
) -> None:
    """Rename a task."""
    async with open_task_store() as store:
        task = await store.edit(resolve_task_ref(store.tasks, ref), title)
    if task is not None:
        format_success("Task updated")


@app.command("delete")
@command_wrapper
async def delete(
    ref: str = typer.Argument(..., help="Task ID or unique suffix"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
) -> None:
    """Delete a task permanently."""
    async with open_task_store() as store:
        task_id = resolve_task_ref(store.tasks, ref)
        task = store.get(task_id)
        if not force and task is not None:
            if not typer.confirm(f'Delete task "{task.title}"?'):
                format_info("Cancelled")
                raise typer.Exit(0)
        deleted = await store.delete(task_id)
    if deleted is not None:
        format_success(f'Deleted "{deleted.title}"')


@app.command("clear-completed")
@command_wrapper
async def clear_completed() -> None:
    """Delete every completed task."""
    async with open_task_store() as store:
        count = await store.clear_completed()
    format_success(f"Cleared {count} completed task(s)")
