"""Rich rendering of the task list."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from rich.console import Console
from rich.table import Table
from rich.text import Text

from todolist.models import Task
from todolist.ui.console import get_console
from todolist.ui.formatters import calculate_unique_suffixes, format_created_date

EMPTY_STATE = "No tasks yet. Add one with: add <title>"

NOTICE_STYLES = {
    "info": "bold blue",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
}


class TaskListView:
    """Draws the task list, its stats chips and transient notices."""

    def __init__(self, console: Console | None = None):
        self.console = console or get_console()

    def render(self, tasks: Sequence[Task], pending_count: int, done_count: int) -> None:
        today = datetime.now()
        self.console.print(Text(f"{today:%A, %B} {today.day}", style="dim"))

        if not tasks:
            self.console.print(Text(EMPTY_STATE, style="dim italic"))
            return

        stats = Text()
        stats.append(f"{pending_count} pending", style="yellow")
        stats.append("  ")
        stats.append(f"{done_count} done", style="green")
        self.console.print(stats)

        self.console.print(self.build_table(tasks))

    @staticmethod
    def build_table(tasks: Sequence[Task]) -> Table:
        suffix_map = calculate_unique_suffixes([task.id for task in tasks])

        table = Table(show_header=True, header_style="bold magenta", box=None)
        table.add_column("", width=3)
        table.add_column("Task")
        table.add_column("Created", style="dim")
        table.add_column("ID", style="cyan")

        for task in tasks:
            status = "[green]☑[/green]" if task.is_done else "☐"
            title = Text(task.title, style="strike dim" if task.is_done else "")
            suffix = task.id[-suffix_map.get(task.id, len(task.id)):]
            table.add_row(status, title, format_created_date(task.created_at), suffix)

        return table

    def notify(self, message: str, kind: str = "info") -> None:
        """Print a one-line notice."""
        style = NOTICE_STYLES.get(kind, NOTICE_STYLES["info"])
        self.console.print(Text(message, style=style))
