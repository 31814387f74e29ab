# src/ai_todos/decompose/validator.py

from __future__ import annotations

from typing import Any

from ..errors import EmptyInput, InputTooLong


def validate_input(raw_text: Any, *, max_chars: int = 4000) -> str:
    """Return the trimmed text or raise EmptyInput / InputTooLong."""
    text = raw_text.strip() if isinstance(raw_text, str) else ""
    if not text:
        raise EmptyInput()
    if len(text) > max_chars:
        raise InputTooLong(max_chars)
    return text
