# tests/test_cli.py

from __future__ import annotations

import json

from typer.testing import CliRunner

from ai_todos.cli import main as cli_main


def _patch_bootstrap(monkeypatch, settings, state) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "_init_logging", lambda settings: None)
    monkeypatch.setattr(cli_main, "create_initial_state", lambda **kwargs: state)


def test_split_creates_todos_for_the_user_option(monkeypatch, settings, state, model) -> None:
    _patch_bootstrap(monkeypatch, settings, state)
    model.next_text = '[{"title": "Buy milk"}, {"title": "Call mom"}]'

    result = CliRunner().invoke(
        cli_main.app, ["split", "buy milk, call mom", "--user", "bob@example.com"]
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["created"] == 2
    bob = state.accounts.find_user_by_email("bob@example.com")
    assert bob is not None
    assert {t.title for t in state.task_store.list_for_owner(bob)} == {"Buy milk", "Call mom"}


def test_split_reports_classified_error_and_exits_nonzero(monkeypatch, settings, state, model) -> None:
    _patch_bootstrap(monkeypatch, settings, state)
    model.next_text = "not json"

    result = CliRunner().invoke(cli_main.app, ["split", "anything", "--user", "bob@example.com"])

    assert result.exit_code == 1
    assert "malformed_model_output" in result.output
