# src/ai_todos/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The pipeline depends on Protocols instead of concrete implementations.
This keeps the model provider and storage swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import Protocol

from ..decompose.models import ModelInvocation, RawModelOutput
from ..tasks.task_models import NewTask, TaskRecord


class ModelClient(Protocol):
    """One JSON-mode text generation call. Raises a classified AiTodosError on failure."""

    async def generate(self, invocation: ModelInvocation) -> RawModelOutput: ...


class TaskRepo(Protocol):
    # Decomposition pipeline
    def insert_batch(self, items: Sequence[NewTask]) -> list[int]: ...

    # Plain record management
    def add_task(self, owner_id: str, title: str) -> TaskRecord: ...
    def list_for_owner(self, owner_id: str, limit: int = 500) -> list[TaskRecord]: ...
    def set_done(self, owner_id: str, task_id: int, is_done: bool) -> TaskRecord: ...
    def toggle(self, owner_id: str, task_id: int) -> TaskRecord: ...
    def delete(self, owner_id: str, task_id: int) -> None: ...
    def delete_for_owner(self, owner_id: str) -> int: ...
