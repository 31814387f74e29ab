# src/ai_todos/decompose/normalizer.py

"""
Model output -> candidate tasks.

The model is untrusted: every bound the prompt asks for is enforced again here.
Bad elements are dropped one by one; only a reply that is not a JSON array fails.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ..errors import MalformedModelOutput
from .models import CandidateTask

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant: {name}")


def parse_model_output(raw_text: str) -> list[Any]:
    try:
        # Strict JSON: no NaN/Infinity, and deep nesting is malformed, not a crash.
        value = json.loads(raw_text, parse_constant=_reject_constant)
    except (TypeError, ValueError, RecursionError):
        raise MalformedModelOutput(raw_text) from None
    if not isinstance(value, list):
        raise MalformedModelOutput(raw_text)
    return value


def _clean_title(item: Any, max_title_length: int) -> str:
    title = item.get("title") if isinstance(item, Mapping) else None
    if not isinstance(title, str):
        return ""
    # rstrip after the cut so a second pass is a no-op.
    return title.strip()[:max_title_length].rstrip()


def normalize_tasks(
    items: Iterable[Any],
    *,
    max_tasks: int = 12,
    max_title_length: int = 120,
) -> list[CandidateTask]:
    """Filter first, then cap: empty titles never use up a slot."""
    out: list[CandidateTask] = []
    dropped = 0
    for item in items:
        if isinstance(item, CandidateTask):
            item = item.to_dict()
        title = _clean_title(item, max_title_length)
        if not title:
            dropped += 1
            continue
        out.append(CandidateTask(title=title, is_done=False))

    if dropped:
        logger.debug("Dropped %d model items with empty/invalid title", dropped)
    if len(out) > max_tasks:
        logger.debug("Capping %d tasks to %d", len(out), max_tasks)
    return out[:max_tasks]


def parse_and_normalize(
    raw_text: str,
    *,
    max_tasks: int = 12,
    max_title_length: int = 120,
) -> list[CandidateTask]:
    return normalize_tasks(
        parse_model_output(raw_text),
        max_tasks=max_tasks,
        max_title_length=max_title_length,
    )
