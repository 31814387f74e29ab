# src/ai_todos/llm/offline.py

from __future__ import annotations

import json
import re

from ..decompose.models import ModelInvocation, RawModelOutput

_USER_BLOCK = re.compile(r"<user_text>\n(.*)\n</user_text>", re.DOTALL)
_SPLIT = re.compile(r"[,;\n]+")
_ENUM_PREFIX = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


class OfflineModelClient:
    """
    Offline deterministic model client used for demos when no API key is configured.

    Splits the user block of the prompt on commas/semicolons/newlines and
    answers with the same JSON array shape the real model is asked for.
    """

    async def generate(self, invocation: ModelInvocation) -> RawModelOutput:
        m = _USER_BLOCK.search(invocation.prompt)
        text = m.group(1) if m else invocation.prompt

        tasks = []
        for part in _SPLIT.split(text):
            title = _ENUM_PREFIX.sub("", part).strip()
            if title:
                tasks.append({"title": title[:1].upper() + title[1:], "is_done": False})

        return RawModelOutput(text=json.dumps(tasks, ensure_ascii=False))
