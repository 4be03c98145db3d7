"""Tests for the version, serve and shell commands."""

from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from todolist import __version__
from todolist.main import app

runner = CliRunner()


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_serve_uses_config_defaults(tmp_config):
    with patch("todolist.commands.serve_command.uvicorn.run") as run:
        with patch("todolist.commands.serve_command.get_connection") as get_connection:
            result = runner.invoke(app, ["serve"])

    assert result.exit_code == 0
    get_connection.assert_called_once_with(tmp_config.config.server.db_path)
    kwargs = run.call_args.kwargs
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 4000


def test_serve_port_from_environment(tmp_config):
    with patch("todolist.commands.serve_command.uvicorn.run") as run:
        with patch("todolist.commands.serve_command.get_connection"):
            result = runner.invoke(
                app, ["serve", "--host", "0.0.0.0", "--db", "/tmp/x.db"], env={"PORT": "5050"}
            )

    assert result.exit_code == 0
    assert run.call_args.kwargs["port"] == 5050
    assert run.call_args.kwargs["host"] == "0.0.0.0"


def test_shell_runs_session():
    store = MagicMock()
    store.repository.close = AsyncMock()
    session = MagicMock()
    session.run = AsyncMock()

    with patch("todolist.commands.utils.get_task_store", return_value=store):
        with patch("todolist.commands.shell_command.Session", return_value=session) as cls:
            result = runner.invoke(app, ["shell"])

    assert result.exit_code == 0
    assert cls.call_args.args[0] is store
    session.run.assert_awaited_once()
    store.load.assert_not_called()
    store.close.assert_called_once()
