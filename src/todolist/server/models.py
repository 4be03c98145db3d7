"""Request and response bodies for the REST API."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TaskCreateRequest(BaseModel):
    title: str | None = None


class TaskUpdateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str | None = None
    is_done: bool | None = Field(default=None, alias="isDone")


class Envelope(BaseModel):
    """``{success, data?, error?}`` wrapper returned by every route."""

    success: bool
    data: Any | None = None
    error: str | None = None
    message: str | None = None
    deletedCount: int | None = None
