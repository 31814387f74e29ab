# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

from ai_todos.cli.commands import CommandRegistry, ConsoleSession, registry


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = {"a": 0}

    def handler(state, session, args):
        called["a"] += 1
        return " ".join(args)

    reg.register("a", handler, "a", aliases=["alpha"])
    session = ConsoleSession(user_id="u")

    assert reg.handle(state, session, "/a x y") == "x y"
    assert reg.handle(state, session, "/ALPHA z") == "z"
    assert called["a"] == 2


def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    session = ConsoleSession(user_id="u")
    assert reg.handle(state, session, "hello") is None
    assert "Unknown command" in (reg.handle(state, session, "/nope") or "")


def test_add_list_done_rm(state, user) -> None:
    session = ConsoleSession(user_id=user[0])

    assert registry.handle(state, session, "/add Water plants").startswith("Added #")
    (todo,) = state.task_store.list_for_owner(user[0])
    assert "[ ]" in registry.handle(state, session, "/list")

    assert "done" in registry.handle(state, session, f"/done {todo.id}")
    assert "[x]" in registry.handle(state, session, "/ls")

    assert registry.handle(state, session, f"/rm #{todo.id}") == f"Deleted #{todo.id}."
    assert registry.handle(state, session, "/list") == "No todos yet."


def test_missing_todo_reports_error_kind(state, user) -> None:
    session = ConsoleSession(user_id=user[0])
    assert registry.handle(state, session, "/done 999").startswith("[not_found]")


def test_split_then_export(state, model, user, tmp_path: Path) -> None:
    session = ConsoleSession(user_id=user[0])
    model.next_text = '[{"title": "Buy milk"}, {"title": "Call mom"}]'

    reply = registry.handle(state, session, "/split buy milk and call mom")
    assert reply.startswith("Created 2 todos")
    assert session.last_raw_json == model.next_text

    out = tmp_path / "raw.json"
    registry.handle(state, session, f"/export {out}")
    assert out.read_text("utf-8") == model.next_text


def test_split_malformed_keeps_raw_for_export(state, model, user) -> None:
    session = ConsoleSession(user_id=user[0])
    model.next_text = "not json"

    reply = registry.handle(state, session, "/split anything")

    assert reply.startswith("[malformed_model_output]")
    assert session.last_raw_json == "not json"


def test_export_before_split(state, user) -> None:
    session = ConsoleSession(user_id=user[0])
    assert "Nothing to export" in registry.handle(state, session, "/export")
