"""Tests for the one-shot task commands."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from todolist.adapters.local_store import LocalStoreTaskRepository
from todolist.main import app
from todolist.models import PersistError
from todolist.services.task_store import TaskStore
from todolist.utils.exit_codes import ExitCode

runner = CliRunner()


@pytest.fixture
def repo(tmp_path):
    return LocalStoreTaskRepository(path=tmp_path / "tasks.json")


@pytest.fixture(autouse=True)
def task_store(repo):
    """Every command gets a fresh store over the same temp document."""
    with patch(
        "todolist.commands.utils.get_task_store",
        side_effect=lambda: TaskStore(repo, undo_window=0.1),
    ):
        yield


def _ids(repo):
    import asyncio

    return [task.id for task in asyncio.run(repo.list_all())]


class TestAdd:
    def test_add_persists_task(self, repo):
        result = runner.invoke(app, ["add", "Buy milk"])

        assert result.exit_code == 0
        assert "Task added" in result.stdout
        assert len(_ids(repo)) == 1

    def test_add_blank_title_is_invalid_args(self, repo):
        result = runner.invoke(app, ["add", "   "])

        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "Title is required" in result.stdout
        assert _ids(repo) == []

    def test_backend_failure_exit_code(self, repo):
        with patch.object(repo, "add", AsyncMock(side_effect=PersistError("disk full"))):
            result = runner.invoke(app, ["add", "x"])

        assert result.exit_code == ExitCode.BACKEND
        assert "disk full" in result.stdout


class TestListToggleEditDelete:
    def test_list_shows_tasks(self):
        runner.invoke(app, ["add", "Walk dog"])

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Walk dog" in result.stdout
        assert "1 pending" in result.stdout

    def test_list_empty(self):
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "No tasks yet" in result.stdout

    def test_toggle_by_suffix(self, repo):
        runner.invoke(app, ["add", "Walk dog"])
        task_id = _ids(repo)[0]

        result = runner.invoke(app, ["toggle", task_id[-4:]])

        assert result.exit_code == 0
        assert "done" in result.stdout

    def test_toggle_unknown_ref_is_not_found(self):
        result = runner.invoke(app, ["toggle", "zzz"])

        assert result.exit_code == ExitCode.NOT_FOUND

    def test_edit(self, repo):
        runner.invoke(app, ["add", "draft"])
        task_id = _ids(repo)[0]

        result = runner.invoke(app, ["edit", task_id, "final"])

        assert result.exit_code == 0
        assert "Task updated" in result.stdout

    def test_delete_with_force(self, repo):
        runner.invoke(app, ["add", "Walk dog"])
        task_id = _ids(repo)[0]

        result = runner.invoke(app, ["delete", task_id, "--force"])

        assert result.exit_code == 0
        assert 'Deleted "Walk dog"' in result.stdout
        assert _ids(repo) == []

    def test_delete_cancelled(self, repo):
        runner.invoke(app, ["add", "Walk dog"])
        task_id = _ids(repo)[0]

        result = runner.invoke(app, ["delete", task_id], input="n\n")

        assert result.exit_code == 0
        assert "Cancelled" in result.stdout
        assert _ids(repo) == [task_id]

    def test_clear_completed(self, repo):
        runner.invoke(app, ["add", "done"])
        runner.invoke(app, ["add", "open"])
        done_id = _ids(repo)[-1]
        runner.invoke(app, ["toggle", done_id])

        result = runner.invoke(app, ["clear-completed"])

        assert result.exit_code == 0
        assert "Cleared 1 completed task(s)" in result.stdout
        assert len(_ids(repo)) == 1
