# src/ai_todos/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (model/tasks/accounts/pipeline).
"""

from __future__ import annotations

import logging

from ..accounts.store import AccountStore
from ..config import get_settings
from ..core.ports import ModelClient
from ..core.state import AppState
from ..decompose.models import DecompositionOptions
from ..decompose.pipeline import DecompositionPipeline
from ..llm.gemini import GeminiClient
from ..llm.offline import OfflineModelClient
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.accounts_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, offline: bool | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    offline=None picks the offline model only when no Gemini key is configured.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if offline is None:
        offline = not (getattr(settings, "gemini_api_key", None) or "").strip()

    model: ModelClient
    if offline:
        logger.warning("No Gemini API key configured: using the offline demo model.")
        model = OfflineModelClient()
    else:
        model = GeminiClient(settings)

    task_store = TaskStore(settings.tasks_db_path)
    pipeline = DecompositionPipeline(
        model=model,
        repo=task_store,
        options=DecompositionOptions.from_settings(settings),
    )

    return AppState(
        settings=settings,
        model=model,
        task_store=task_store,
        accounts=AccountStore(
            settings.accounts_db_path, admin_token=getattr(settings, "admin_token", None)
        ),
        pipeline=pipeline,
        offline=offline,
    )
