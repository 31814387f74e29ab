# src/ai_todos/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import ConsoleSession
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def run_console_loop(state: AppState, user_id: str) -> None:
    """
    REPL over the command registry.

    Plain text (no leading slash) is sent to /split, so typing a to-do list
    is enough to get todos.
    """
    session = ConsoleSession(user_id=user_id)
    logger.info("Console started (user=%s offline=%s).", user_id, state.offline)
    _print_ts("[CONSOLE] Type some text to split into todos. Use /help for commands, /exit to quit.\n")

    while True:
        try:
            line = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            line = "/split " + line

        reply = command_registry.handle(state, session, line)
        if reply:
            _print_ts(reply)
