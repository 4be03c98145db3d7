"""Tests for ConfigService."""

from __future__ import annotations

import json

import pytest

from todolist.models import AppConfig, ValidationError
from todolist.services.config_service import ConfigService


def test_first_run_writes_defaults(tmp_config, tmp_path):
    config = tmp_config.config

    assert config.storage.type == "local"
    assert config.storage.path == str(tmp_path / "tasks.json")
    assert config.server.db_path == str(tmp_path / "todo.db")
    assert config.api.endpoint == "http://localhost:4000"
    assert config.server.port == 4000
    assert config.ui.undo_seconds == 4.0
    assert json.loads(tmp_config.config_path.read_text())["storage"]["type"] == "local"


def test_corrupt_config_falls_back_to_defaults(tmp_config):
    tmp_config.config_path.write_text("{broken")

    assert tmp_config.config == AppConfig()
    assert tmp_config.config_path.read_text() == "{broken"


def test_get_dot_path(tmp_config):
    assert tmp_config.get("api.timeout") == 30
    assert tmp_config.get("nope.key") is None
    assert tmp_config.get("api.nothing") is None


def test_set_coerces_and_persists(tmp_config, tmp_path):
    tmp_config.set("ui.undo_seconds", "2.5")
    tmp_config.set("storage.type", "remote")

    reloaded = ConfigService()
    assert reloaded.config_path == tmp_config.config_path
    assert reloaded.config.ui.undo_seconds == 2.5
    assert reloaded.config.storage.type == "remote"


@pytest.mark.parametrize(
    ("key", "value"),
    [("storage.type", "postgres"), ("ui.undo_seconds", "-1"), ("server.port", "abc")],
)
def test_set_rejects_invalid_values(tmp_config, key, value):
    with pytest.raises(ValidationError):
        tmp_config.set(key, value)


def test_set_rejects_unknown_key(tmp_config):
    with pytest.raises(ValidationError, match="Unknown config key"):
        tmp_config.set("api.token", "secret")


def test_set_value_on_unset_optional_key(tmp_config):
    tmp_config._config = AppConfig()

    tmp_config.set("storage.path", "/tmp/elsewhere.json")

    assert tmp_config.get("storage.path") == "/tmp/elsewhere.json"


def test_reset_single_key(tmp_config):
    tmp_config.set("api.endpoint", "http://example.test")

    tmp_config.reset("api.endpoint")

    assert tmp_config.get("api.endpoint") == "http://localhost:4000"


def test_reset_everything(tmp_config, tmp_path):
    tmp_config.set("storage.type", "sqlite")

    tmp_config.reset()

    assert tmp_config.config.storage.type == "local"
    assert tmp_config.config.storage.path == str(tmp_path / "tasks.json")


def test_changing_storage_rebuilds_strategy(tmp_config):
    assert tmp_config.storage_strategy_context.storage_type == "local"

    tmp_config.set("storage.type", "remote")

    assert tmp_config.storage_strategy_context.storage_type == "remote"
