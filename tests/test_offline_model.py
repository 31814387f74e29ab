# tests/test_offline_model.py

from __future__ import annotations

import json

import pytest

from ai_todos.decompose.models import ModelInvocation
from ai_todos.decompose.prompt import build_prompt
from ai_todos.llm.offline import OfflineModelClient


@pytest.mark.asyncio
async def test_offline_model_splits_the_user_block() -> None:
    prompt = build_prompt("buy milk, call mom;\n1. finish report")
    out = await OfflineModelClient().generate(ModelInvocation(prompt=prompt))
    assert json.loads(out.text) == [
        {"title": "Buy milk", "is_done": False},
        {"title": "Call mom", "is_done": False},
        {"title": "Finish report", "is_done": False},
    ]
