"""Task helper utilities."""

from __future__ import annotations

import time
from collections.abc import Sequence
from datetime import UTC, datetime

from todolist.models import NotFoundError, Task, ValidationError

_last_id = 0


def generate_task_id() -> str:
    """Generate a new task id from the current epoch time in milliseconds.

    Ids issued by one process are strictly increasing even if the clock
    stalls or two tasks are created within the same millisecond.

    Returns:
        Decimal string id (e.g., "1760781600123")
    """
    global _last_id
    candidate = time.time_ns() // 1_000_000
    if candidate <= _last_id:
        candidate = _last_id + 1
    _last_id = candidate
    return str(candidate)


def utc_now() -> datetime:
    """Get the current timezone-aware UTC timestamp."""
    return datetime.now(UTC)


def normalize_title(title: str | None) -> str:
    """Trim a title and reject it when nothing is left.

    Raises:
        ValidationError: If the title is missing, empty or whitespace-only
    """
    normalized = (title or "").strip()
    if not normalized:
        raise ValidationError("Title is required")
    return normalized


def find_shortest_unique_suffix(task_ids: Sequence[str], target_id: str) -> str:
    """
    Find the shortest suffix of target_id that uniquely identifies it.

    Args:
        task_ids: List of all task IDs
        target_id: The task ID to find a unique suffix for

    Returns:
        The shortest unique suffix
    """
    for length in range(1, len(target_id) + 1):
        suffix = target_id[-length:]
        matches = [tid for tid in task_ids if tid.endswith(suffix)]
        if len(matches) == 1:
            return suffix
    return target_id


def resolve_task_ref(tasks: Sequence[Task], ref: str) -> str:
    """
    Resolve a task ID or suffix to a full task ID.

    An exact id match wins; otherwise the reference must be the suffix of
    exactly one task id.

    Args:
        tasks: Tasks currently known to the caller
        ref: Full task ID or suffix to resolve

    Returns:
        The full task ID

    Raises:
        ValidationError: If the reference is empty or matches several tasks
        NotFoundError: If no task matches
    """
    ref = ref.strip()
    if not ref:
        raise ValidationError("Task reference is required")

    task_ids = [task.id for task in tasks]
    if ref in task_ids:
        return ref

    matching = [tid for tid in task_ids if tid.endswith(ref)]
    if not matching:
        raise NotFoundError(f"No task found with ID or suffix '{ref}'")
    if len(matching) > 1:
        suggestions = ", ".join(
            find_shortest_unique_suffix(task_ids, tid) for tid in matching
        )
        raise ValidationError(
            f"Ambiguous task reference '{ref}', use one of: {suggestions}"
        )
    return matching[0]
