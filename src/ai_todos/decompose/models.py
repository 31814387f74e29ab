# src/ai_todos/decompose/models.py

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class DecompositionOptions:
    """
    Bounds for one decomposition run.

    Defaults match production; tests may shrink them.
    """

    max_input_chars: int = 4000
    max_tasks: int = 12
    max_title_length: int = 120
    min_tasks_on_sparse_input: int = 3
    temperature: float = 0.2
    max_output_tokens: int = 800

    @classmethod
    def from_settings(cls, settings) -> DecompositionOptions:
        d = cls()
        return cls(
            max_input_chars=int(getattr(settings, "max_input_chars", d.max_input_chars)),
            max_tasks=int(getattr(settings, "max_tasks", d.max_tasks)),
            max_title_length=int(getattr(settings, "max_title_length", d.max_title_length)),
            min_tasks_on_sparse_input=int(
                getattr(settings, "min_tasks_on_sparse_input", d.min_tasks_on_sparse_input)
            ),
            temperature=float(getattr(settings, "temperature", d.temperature)),
            max_output_tokens=int(getattr(settings, "max_output_tokens", d.max_output_tokens)),
        )


@dataclass(frozen=True, slots=True)
class DecompositionRequest:
    raw_text: str
    requester_id: str


@dataclass(frozen=True, slots=True)
class ModelInvocation:
    prompt: str
    temperature: float = 0.2
    max_output_tokens: int = 800
    response_mime_type: str = "application/json"


@dataclass(frozen=True, slots=True)
class RawModelOutput:
    text: str


@dataclass(frozen=True, slots=True)
class CandidateTask:
    title: str
    is_done: bool = False

    def to_dict(self) -> dict[str, object]:
        return {"title": self.title, "is_done": self.is_done}


@dataclass(frozen=True, slots=True)
class DecompositionResult:
    tasks: list[CandidateTask] = field(default_factory=list)
    raw_json: str = ""
    created: int = 0

    def to_payload(self) -> dict[str, object]:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "raw_json": self.raw_json,
            "created": self.created,
        }
