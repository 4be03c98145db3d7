"""Row and statement helpers for the tasks table."""

from __future__ import annotations

import sqlite3
from datetime import UTC, datetime
from typing import Any

from todolist.models import Task, TaskUpdate


def now_iso() -> str:
    return datetime.now(UTC).isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Read a stored timestamp. Naive values are taken as UTC."""
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def row_to_task(row: sqlite3.Row) -> Task:
    return Task(
        id=row["id"],
        title=row["title"],
        is_done=bool(row["is_done"]),
        created_at=parse_timestamp(row["created_at"]),
        updated_at=parse_timestamp(row["updated_at"]),
    )


def update_assignments(updates: TaskUpdate) -> tuple[str, list[Any]]:
    """Build the SET clause for *updates*.

    ``updated_at`` is always assigned, so an empty update still touches the
    row. Values are bound as parameters, only column names are inlined.
    """
    assignments = ["updated_at = ?"]
    params: list[Any] = [now_iso()]
    if updates.title is not None:
        assignments.append("title = ?")
        params.append(updates.title.strip())
    if updates.is_done is not None:
        assignments.append("is_done = ?")
        params.append(updates.is_done)
    return ", ".join(assignments), params
