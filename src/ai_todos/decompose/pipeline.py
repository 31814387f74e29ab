# src/ai_todos/decompose/pipeline.py

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..core.ports import ModelClient, TaskRepo
from ..errors import Unauthenticated
from .materializer import materialize_tasks
from .models import (
    DecompositionOptions,
    DecompositionRequest,
    DecompositionResult,
    ModelInvocation,
)
from .normalizer import parse_and_normalize
from .prompt import build_prompt
from .validator import validate_input

logger = logging.getLogger(__name__)


class DecompositionPipeline:
    """
    Free-form text -> persisted todos, via one model call.

    validate -> prompt -> model -> parse/normalize -> materialize.
    Each stage raises a classified AiTodosError and stops the run; nothing retries.
    The pipeline keeps no state between runs.
    """

    def __init__(
        self,
        *,
        model: ModelClient,
        repo: TaskRepo,
        options: DecompositionOptions | None = None,
    ) -> None:
        self._model = model
        self._repo = repo
        self._options = options or DecompositionOptions()

    @property
    def options(self) -> DecompositionOptions:
        return self._options

    async def run(self, text: Any, requester_id: str | None) -> DecompositionResult:
        if not requester_id:
            raise Unauthenticated()

        opts = self._options
        request = DecompositionRequest(
            raw_text=validate_input(text, max_chars=opts.max_input_chars),
            requester_id=requester_id,
        )

        invocation = ModelInvocation(
            prompt=build_prompt(request.raw_text, opts),
            temperature=opts.temperature,
            max_output_tokens=opts.max_output_tokens,
        )
        logger.info(
            "Decomposing %d chars for user=%s", len(request.raw_text), request.requester_id
        )

        raw = await self._model.generate(invocation)

        tasks = parse_and_normalize(
            raw.text,
            max_tasks=opts.max_tasks,
            max_title_length=opts.max_title_length,
        )
        # sqlite is blocking; keep it off the event loop.
        ids = await asyncio.to_thread(
            materialize_tasks, self._repo, tasks, requester_id=request.requester_id
        )

        logger.info("Decomposed into %d tasks for user=%s", len(ids), request.requester_id)
        return DecompositionResult(tasks=tasks, raw_json=raw.text, created=len(ids))
