# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from ai_todos.accounts.store import AccountStore
from ai_todos.core.state import AppState
from ai_todos.decompose.models import DecompositionOptions
from ai_todos.decompose.pipeline import DecompositionPipeline
from ai_todos.tasks.task_store import TaskStore

from .fakes import FakeModelClient


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the model clients.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's environment.
    """
    return SimpleNamespace(
        app_name="ai-todos-test",
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
        accounts_db_path=tmp_path / "accounts.sqlite3",
        gemini_api_key="test-key",
        gemini_base_url="https://gemini.test/v1beta",
        gemini_model="gemini-test",
        llm_connect_timeout_seconds=1.0,
        llm_read_timeout_seconds=1.0,
        max_input_chars=4000,
        max_tasks=12,
        max_title_length=120,
        min_tasks_on_sparse_input=3,
        temperature=0.2,
        max_output_tokens=800,
        cors_origins=["*"],
        admin_token="admin-secret",
    )


@pytest.fixture()
def model() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture()
def state(settings: SimpleNamespace, model: FakeModelClient) -> AppState:
    """
    AppState wired with a fake model.

    NOTE: We keep real SQLite stores here (TaskStore/AccountStore) because
    their correctness is part of what we want to test.
    """
    task_store = TaskStore(settings.tasks_db_path)
    return AppState(
        settings=settings,
        model=model,
        task_store=task_store,
        accounts=AccountStore(settings.accounts_db_path, admin_token=settings.admin_token),
        pipeline=DecompositionPipeline(
            model=model,
            repo=task_store,
            options=DecompositionOptions.from_settings(settings),
        ),
    )


@pytest.fixture()
def user(state: AppState) -> tuple[str, str]:
    """(user_id, bearer token) for a fresh account."""
    user_id = state.accounts.create_user("alice@example.com")
    return user_id, state.accounts.issue_token(user_id)
