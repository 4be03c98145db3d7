"""Configuration models.

This module defines the configuration models that select one of the
storage backends (local document store, sqlite, remote API) and tune the
server and the interactive UI.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Storage backend configuration.

    ``local`` keeps tasks in a single JSON document, ``sqlite`` talks to the
    relational table directly and ``remote`` goes through the REST API.
    """

    type: Literal["local", "sqlite", "remote"] = Field(
        default="local", description="Storage backend type"
    )
    path: str | None = Field(
        default=None, description="Document path (local only)"
    )
    key: str = Field(default="todo_tasks", description="Document key (local only)")

    @field_validator("key")
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Reject blank document keys."""
        if not v or not v.strip():
            raise ValueError("key cannot be empty")
        return v.strip()


class APIConfig(BaseModel):
    """API configuration."""

    endpoint: str = Field(default="http://localhost:4000")
    timeout: int = Field(default=30)


class ServerConfig(BaseModel):
    """REST server configuration."""

    host: str = Field(default="127.0.0.1")
    port: int = Field(default=4000, ge=1, le=65535)
    db_path: str | None = Field(default=None)


class UIConfig(BaseModel):
    """UI configuration."""

    undo_seconds: float = Field(default=4.0, gt=0)


class AppConfig(BaseModel):
    """Main todolist configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
