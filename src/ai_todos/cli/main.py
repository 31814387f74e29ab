# src/ai_todos/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs one of:
- serve: the HTTP API under uvicorn,
- console: interactive REPL for one user,
- split: one-off decomposition,
- create-user: make an account and print a bearer token.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

import typer

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..errors import AiTodosError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="ai-todos",
    help="Personal todos with text-to-tasks decomposition.",
    add_completion=False,
)


def _init_logging(settings) -> None:
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=getattr(settings, "data_dir", ".local/ai_todos"), console_level=console_level)


def _user_for_email(state, email: str) -> str:
    return state.accounts.find_user_by_email(email) or state.accounts.create_user(email)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, help="Port (default from settings)."),
    offline: bool = typer.Option(False, help="Use the offline demo model instead of Gemini."),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from ..api.app import create_app

    settings = get_settings()
    _init_logging(settings)
    logger.info("Starting %s API...", settings.app_name)

    # Without --offline a missing key is reported per request (configuration_missing).
    state = create_initial_state(settings=settings, offline=offline)
    uvicorn.run(
        create_app(state),
        host=host or settings.api_host,
        port=port or settings.api_port,
        log_config=None,
    )


@app.command()
def console(
    user: str = typer.Option(
        "me@localhost", "--user", help="Account email to act as (created if missing)."
    ),
) -> None:
    """Interactive todo console."""
    settings = get_settings()
    _init_logging(settings)
    state = create_initial_state(settings=settings)
    run_console_loop(state, _user_for_email(state, user))
    logger.info("Bye.")


@app.command()
def split(
    text: str = typer.Argument(..., help="Free-form text to turn into todos."),
    user: str = typer.Option(
        "me@localhost", "--user", help="Account email that owns the created todos."
    ),
) -> None:
    """Decompose TEXT into todos once and print the result as JSON."""
    settings = get_settings()
    _init_logging(settings)
    state = create_initial_state(settings=settings)
    try:
        result = asyncio.run(state.pipeline.run(text, _user_for_email(state, user)))
    except AiTodosError as e:
        typer.echo(json.dumps(e.to_payload(), ensure_ascii=False, indent=2), err=True)
        raise typer.Exit(code=1) from None
    typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2))


@app.command("create-user")
def create_user(email: str = typer.Argument(..., help="Email of the new account.")) -> None:
    """Create an account and print its user id and a bearer token."""
    settings = get_settings()
    _init_logging(settings)
    state = create_initial_state(settings=settings, offline=True)
    user_id = state.accounts.create_user(email)
    token = state.accounts.issue_token(user_id)
    typer.echo(f"user_id: {user_id}\ntoken:   {token}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
