# src/ai_todos/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from ..accounts.store import AccountStore
from ..decompose.pipeline import DecompositionPipeline
from .ports import ModelClient, TaskRepo


@dataclass
class AppState:
    """Wired collaborators shared by the HTTP API and the console."""

    settings: object
    model: ModelClient
    task_store: TaskRepo
    accounts: AccountStore
    pipeline: DecompositionPipeline
    offline: bool = False
