# src/ai_todos/cli/commands.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..core.state import AppState
from ..errors import AiTodosError, MalformedModelOutput

logger = logging.getLogger(__name__)


@dataclass
class ConsoleSession:
    """
    Per-console presentation state.

    last_raw_json is kept here (not in the pipeline) so /export can save the
    model's reply from the previous /split.
    """

    user_id: str
    last_raw_json: str | None = None


CommandHandler = Callable[[AppState, ConsoleSession, list[str]], str]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /list, /split, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, session: ConsoleSession, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, session, args)
        except AiTodosError as e:
            return f"[{e.kind}] {e.message}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def format_todos(state: AppState, user_id: str) -> str:
    todos = state.task_store.list_for_owner(user_id)
    if not todos:
        return "No todos yet."
    lines = []
    for t in todos:
        mark = "x" if t.is_done else " "
        lines.append(f"  [{mark}] #{t.id} {t.title}")
    return "\n".join(lines)


def cmd_help(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    return registry.build_help()


def cmd_status(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    model = "offline demo" if state.offline else getattr(state.settings, "gemini_model", "?")
    return (
        "Status:\n"
        f"  User: {session.user_id}\n"
        f"  Model: {model}\n"
        f"  Todos: {len(state.task_store.list_for_owner(session.user_id))}"
    )


def cmd_list(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    return format_todos(state, session.user_id)


def cmd_add(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    title = " ".join(args).strip()
    if not title:
        return "Usage: /add <title>"
    task = state.task_store.add_task(session.user_id, title)
    return f"Added #{task.id}: {task.title}"


def cmd_done(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = state.task_store.toggle(session.user_id, task_id)
    return f"#{task.id} is now {'done' if task.is_done else 'open'}."


def cmd_rm(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    state.task_store.delete(session.user_id, task_id)
    return f"Deleted #{task_id}."


def cmd_split(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    """
    /split <free text>  -> turn the text into todos via the model
    """
    text = " ".join(args)
    try:
        result = asyncio.run(state.pipeline.run(text, session.user_id))
    except MalformedModelOutput as e:
        session.last_raw_json = e.raw_text
        raise
    session.last_raw_json = result.raw_json
    if not result.tasks:
        return "The model found no tasks in that text."
    lines = [f"Created {result.created} todos:"]
    lines.extend(f"  - {t.title}" for t in result.tasks)
    return "\n".join(lines)


def cmd_export(state: AppState, session: ConsoleSession, args: list[str]) -> str:
    """
    /export [path]  -> save the model's raw JSON from the last /split
    """
    if session.last_raw_json is None:
        return "Nothing to export yet. Use /split first."
    path = Path(args[0]) if args else Path("ai-todos.json")
    path.write_text(session.last_raw_json, "utf-8")
    return f"Saved raw model JSON to {path}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show user, model and todo count.")
registry.register("list", cmd_list, help_text="List your todos (newest first).", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a todo: /add <title>.")
registry.register("done", cmd_done, help_text="Toggle a todo: /done <id>.")
registry.register("rm", cmd_rm, help_text="Delete a todo: /rm <id>.", aliases=["del"])
registry.register("split", cmd_split, help_text="Text -> todos via the model: /split <text>.")
registry.register("export", cmd_export, help_text="Save last raw model JSON: /export [path].")
