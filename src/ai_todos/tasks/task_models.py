# src/ai_todos/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NewTask:
    """Insert request for one task row; owner_id is the requester's user id."""

    title: str
    owner_id: str
    is_done: bool = False


@dataclass(slots=True)
class TaskRecord:
    id: int
    title: str
    is_done: bool
    owner_id: str
    inserted_at: float

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "is_done": self.is_done,
            "user_id": self.owner_id,
            "inserted_at": self.inserted_at,
        }
