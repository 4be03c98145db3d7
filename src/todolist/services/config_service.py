"""Configuration service for managing todolist configuration.

This module provides the ConfigService class, which is the single source of
truth for configuration management. It handles:

- Loading and saving config.json
- Dot-separated key access (``ui.undo_seconds``)
- Building the storage strategy selected by the configuration
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todolist.models import AppConfig, ValidationError
from todolist.models.storage_strategy import (
    StorageStrategyContext,
    create_storage_strategy,
)
from todolist.utils.logger import get_logger


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("todolist"))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir("todolist"))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None
        self._storage_strategy_context: StorageStrategyContext | None = None
        self.logger = get_logger()

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    @property
    def storage_strategy_context(self) -> StorageStrategyContext:
        """Get the StorageStrategyContext for the current configuration."""
        if self._storage_strategy_context is None:
            strategy = create_storage_strategy(self.config)
            self.logger.info("using %s storage", strategy.storage_type)
            self._storage_strategy_context = StorageStrategyContext(strategy)
        return self._storage_strategy_context

    def load_config(self) -> AppConfig:
        """Load configuration from storage, creating defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            # Expected on first run
            self._config = self.create_default_config()
        except (OSError, PydanticValidationError) as e:
            # If config is corrupted, fall back to defaults without overwriting it
            self.logger.warning("ignoring unreadable config %s: %s", self.config_path, e)
            self._config = AppConfig()

        return self._config

    def save_config(self) -> None:
        """Save the current configuration to storage."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self.config.model_dump_json(indent=4))

            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def create_default_config(self) -> AppConfig:
        """Create and persist the default configuration (local document store)."""
        self._config = AppConfig()
        self._config.storage.path = str(self.data_dir / "tasks.json")
        self._config.server.db_path = str(self.data_dir / "todo.db")
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key."""
        return self.get_from_config(self.config, key)

    @staticmethod
    def get_from_config(config: AppConfig, key: str) -> Any:
        """Get value from a config object using dot notation."""
        value: Any = config
        for k in key.split("."):
            if isinstance(value, BaseModel) and k in type(value).model_fields:
                value = getattr(value, k)
            else:
                return None
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key.

        Raises:
            ValidationError: If the key is unknown or the value is invalid
        """
        if self.get(key) is None and not self.is_known_key(key):
            raise ValidationError(f"Unknown config key: {key}")

        keys = key.split(".")
        config_dict = self.config.model_dump()

        current = config_dict
        for k in keys[:-1]:
            current = current[k]
        current[keys[-1]] = value

        try:
            self._config = AppConfig(**config_dict)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid value for {key}: {value}") from e

        self._storage_strategy_context = None
        self.save_config()

    def reset(self, key: str | None = None) -> None:
        """Reset configuration (or one key) to defaults."""
        if key is None:
            self._config = None
            self._storage_strategy_context = None
            self.create_default_config()
            return

        default_value = self.get_from_config(AppConfig(), key)
        if default_value is None and not self.is_known_key(key):
            raise ValidationError(f"Unknown config key: {key}")
        self.set(key, default_value)

    @staticmethod
    def is_known_key(key: str) -> bool:
        model: Any = AppConfig
        for k in key.split("."):
            fields = getattr(model, "model_fields", None)
            if not fields or k not in fields:
                return False
            model = fields[k].annotation
        return True


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get the process-wide ConfigService instance."""
    return ConfigService()
