"""Output formatters shared by the CLI commands and the interactive view."""

from __future__ import annotations

from datetime import datetime, timedelta

from todolist.ui.console import get_console


def calculate_unique_suffixes(task_ids: list[str]) -> dict[str, int]:
    """
    Calculate minimum unique suffix length for each task ID.

    Starts from length 1 and grows until unique among all IDs.

    Args:
        task_ids: List of full task IDs

    Returns:
        Dict mapping task_id -> required suffix length
    """
    result = {}

    for task_id in task_ids:
        for length in range(1, len(task_id) + 1):
            suffix = task_id[-length:]
            conflicts = [
                tid for tid in task_ids if tid != task_id and tid.endswith(suffix)
            ]
            if not conflicts:
                result[task_id] = length
                break
        else:
            result[task_id] = len(task_id)

    return result


def _clock(moment: datetime) -> str:
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment.minute:02d} {meridiem}"


def format_created_date(created_at: datetime, now: datetime | None = None) -> str:
    """Format a creation time relative to today, in local time.

    Examples: "Today at 3:04 PM", "Yesterday at 9:30 AM", "Jan 2, 2026".
    """
    local = created_at.astimezone()
    today = (now.astimezone() if now is not None else datetime.now().astimezone()).date()

    if local.date() == today:
        return f"Today at {_clock(local)}"
    if local.date() == today - timedelta(days=1):
        return f"Yesterday at {_clock(local)}"
    return f"{local:%b} {local.day}, {local.year}"


def format_error(message: str) -> None:
    """Format and display an error message."""
    get_console().print(f"[bold red]Error:[/bold red] {message}")


def format_success(message: str) -> None:
    """Format and display a success message."""
    get_console().print(f"[bold green]Success:[/bold green] {message}")


def format_info(message: str) -> None:
    """Format and display an info message."""
    get_console().print(f"[bold blue]Info:[/bold blue] {message}")
