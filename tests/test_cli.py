"""Tests for the CLI commands and the browse session."""

import json
from datetime import date
from unittest.mock import patch, MagicMock

import pytest
from click.testing import CliRunner

from todoview.adapters.file_store import FileTodoStore
from todoview.cli import BrowseSession, main
from todoview.config import Config
from todoview.core.collection import TodoCollection
from todoview.errors import NetworkError
from todoview.workflows import Outcome, TodoManager


@pytest.fixture
def config(tmp_path):
    return Config(data_dir=tmp_path)


@pytest.fixture
def repo():
    repo = MagicMock()
    repo.fetch_all.return_value = [
        {"id": i + 1, "todo": f"Remote todo {i + 1}", "completed": False, "userId": 3}
        for i in range(25)
    ]
    repo.create.return_value = {"id": 255, "todo": "Buy milk", "completed": False, "userId": 1}
    return repo


@pytest.fixture
def manager(repo, config):
    return TodoManager(
        repo,
        FileTodoStore(config.data_dir),
        TodoCollection(page_size=config.page_size),
        today=lambda: date(2025, 6, 15),
    )


@pytest.fixture
def run(config, manager):
    runner = CliRunner()

    def invoke(*args, **kwargs):
        with patch("todoview.cli.load_config", return_value=config), \
                patch("todoview.cli.build_manager", return_value=manager):
            return runner.invoke(main, list(args), **kwargs)

    return invoke


class TestListCommand:
    def test_first_page(self, run):
        result = run("list")

        assert result.exit_code == 0
        assert "25 todos total" in result.output
        assert "Remote todo 1 " in result.output
        assert "Remote todo 11" not in result.output
        assert "Showing 1 to 10 of 25 results" in result.output
        assert "Pages: [1] 2 3" in result.output

    def test_page_out_of_range_is_clamped(self, run):
        result = run("list", "--page", "9")

        assert result.exit_code == 0
        assert "Showing 21 to 25 of 25 results" in result.output

    def test_search(self, run):
        result = run("list", "--search", "TODO 2")

        assert "Showing 7 of 25 todos" in result.output
        assert "Remote todo 1 " not in result.output

    def test_date_range(self, run):
        result = run("list", "--from", "2024-01-03", "--to", "2024-01-03", "--json")

        data = json.loads(result.output)
        assert data["total"] == 5
        assert [t["id"] for t in data["todos"]] == [21, 22, 23, 24, 25]
        assert data["todos"][0]["createdAt"] == "2024-01-03"
        assert data["todos"][0]["origin"] == "remote"

    def test_bad_date_rejected(self, run):
        result = run("list", "--from", "yesterday")

        assert result.exit_code == 2

    def test_load_failure_exits(self, run, repo):
        repo.fetch_all.side_effect = NetworkError("Unable to connect to the API")

        result = run("list")

        assert result.exit_code == 1
        assert "Failed to load todos: Unable to connect to the API" in result.output


class TestAddCommand:
    def test_adds_with_configured_user(self, run, repo, config):
        result = run("add", "Buy milk")

        assert result.exit_code == 0
        assert "Todo added successfully!" in result.output
        assert "#255" in result.output
        repo.create.assert_called_once_with("Buy milk", completed=False, user_id=1)
        assert json.loads((config.data_dir / "user_added_todos.json").read_text())[0]["id"] == 255

    def test_explicit_user_id(self, run, repo):
        run("add", "Buy milk", "--user-id", "4")

        repo.create.assert_called_once_with("Buy milk", completed=False, user_id=4)

    def test_blank_text_fails(self, run, repo):
        result = run("add", "   ")

        assert result.exit_code == 1
        assert "Please enter a task description" in result.output
        repo.create.assert_not_called()


class TestToggleCommand:
    def test_remote_toggle_notes_session_only(self, run):
        result = run("toggle", "3")

        assert result.exit_code == 0
        assert "Todo completed successfully!" in result.output
        assert "this session only" in result.output

    def test_pending(self, run):
        result = run("toggle", "3", "--pending")

        assert "Todo marked as pending successfully!" in result.output

    def test_unknown_id(self, run):
        result = run("toggle", "999")

        assert result.exit_code == 0
        assert "No todo with id 999." in result.output


class TestBrowseSession:
    @pytest.fixture
    def session(self, manager):
        manager.load()
        return BrowseSession(manager, user_id=1, error_seconds=5, success_seconds=3)

    def test_paging_commands(self, session):
        collection = session.manager.collection
        session.handle("n")
        assert collection.page == 2
        session.handle("g 3")
        assert collection.page == 3
        session.handle("p")
        assert collection.page == 2

    def test_search_and_clear(self, session):
        session.handle("s todo 2")
        assert len(session.manager.collection.filtered) == 7
        session.handle("c")
        assert len(session.manager.collection.filtered) == 25

    def test_date_filters_combine(self, session):
        session.handle("from 2024-01-02")
        session.handle("to 2024-01-02")
        criteria = session.manager.collection.criteria
        assert (criteria.date_from, criteria.date_to) == ("2024-01-02", "2024-01-02")
        assert len(session.manager.collection.filtered) == 10

    def test_bad_date_becomes_notification(self, session):
        session.handle("from someday")
        assert session.notifications[-1].is_error is True
        assert session.manager.collection.criteria.date_from is None

    def test_add_and_toggle_notify(self, session):
        session.handle("a Buy milk")
        session.handle("x 255")
        messages = [n.message for n in session.notifications]
        assert messages == ["Todo added successfully!", "Todo completed successfully!"]
        assert session.manager.collection.all[0].completed is True

    def test_toggle_unknown_id_is_silent(self, session):
        session.handle("u 999")
        assert session.notifications == []

    def test_quit(self, session):
        assert session.handle("q") is False
        assert session.handle("n") is True

    def test_notifications_expire(self, session):
        session.notify(Outcome(ok=True, message="done"))
        session.notify(Outcome(ok=False, message="broken"))
        with patch("todoview.cli.time.monotonic", return_value=float("inf")):
            session.render()
        assert session.notifications == []

    def test_browse_command_quits(self, run):
        result = run("browse", input="n\nq\n")

        assert result.exit_code == 0
        assert "Showing 11 to 20 of 25 results" in result.output
