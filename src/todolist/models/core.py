"""Task data models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """Task model representing a single to-do item.

    Attributes:
        id: Opaque unique identifier assigned at creation time
        title: Trimmed, non-empty task description
        is_done: Completion status (``isDone`` on the wire)
        created_at: Creation timestamp, never changed afterwards
        updated_at: Last mutation timestamp, kept by the backend only
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    is_done: bool = Field(default=False, alias="isDone")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt", exclude=True)

    def to_api(self) -> dict[str, Any]:
        """Return the JSON shape ``{id, title, isDone, createdAt}``."""
        return self.model_dump(mode="json", by_alias=True)


class TaskUpdate(BaseModel):
    """Model for updating an existing task.

    All fields are optional - only provided fields will be updated.

    Attributes:
        title: New task description
        is_done: New completion status
    """

    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    is_done: bool | None = Field(default=None, alias="isDone")

    def to_api(self) -> dict[str, Any]:
        """Return only the provided fields, using wire names."""
        return self.model_dump(by_alias=True, exclude_none=True)
