# src/ai_todos/decompose/materializer.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.ports import TaskRepo
from ..errors import PersistenceFailure
from ..tasks.task_models import NewTask
from .models import CandidateTask

logger = logging.getLogger(__name__)


def materialize_tasks(
    repo: TaskRepo,
    candidates: Sequence[CandidateTask],
    *,
    requester_id: str,
) -> list[int]:
    """
    Insert one row per candidate, all owned by requester_id, as a single batch.

    Returns the new row ids. Any store error becomes PersistenceFailure.
    """
    if not candidates:
        return []

    batch = [NewTask(title=c.title, owner_id=requester_id, is_done=False) for c in candidates]
    try:
        ids = repo.insert_batch(batch)
    except Exception as e:
        logger.exception("Batch insert failed owner=%s size=%d", requester_id, len(batch))
        raise PersistenceFailure(str(e) or e.__class__.__name__) from e
    return list(ids)
