# src/ai_todos/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from collections.abc import Sequence
from pathlib import Path

from ..errors import NotFound
from .task_models import NewTask, TaskRecord

logger = logging.getLogger(__name__)


class TaskNotFound(NotFound):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"Task not found: {task_id}", task_id=task_id)
        self.task_id = task_id


class TaskStore:
    """
    SQLite todo store.

    The schema is intentionally simple and migration-safe:
    - create table if missing
    - use PRAGMA table_info to detect missing columns
    - add columns with ALTER TABLE only when needed

    Every read/write is scoped by owner_id: a row is only visible to the user
    that owns it.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("TaskStore ready db=%s total=%s", self._db_path, self.count_tasks())

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            cur = conn.cursor()
            cur.execute(
                """
                CREATE TABLE IF NOT EXISTS todos (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT NOT NULL,
                    is_done INTEGER NOT NULL DEFAULT 0,
                    user_id TEXT NOT NULL,
                    inserted_at REAL NOT NULL
                )
                """
            )

            cur.execute("PRAGMA table_info(todos)")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE todos ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s", name)

            add_col("is_done", "INTEGER NOT NULL DEFAULT 0")
            add_col("inserted_at", "REAL NOT NULL DEFAULT 0")

            cur.execute(
                "CREATE INDEX IF NOT EXISTS idx_todos_owner ON todos(user_id, inserted_at)"
            )
            conn.commit()
        finally:
            conn.close()

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> TaskRecord:
        return TaskRecord(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            is_done=bool(row["is_done"]),
            owner_id=str(row["user_id"]),
            inserted_at=float(row["inserted_at"] or 0.0),
        )

    # ---- public API ----

    def count_tasks(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM todos").fetchone()
            return int(n)
        finally:
            conn.close()

    def insert_batch(self, items: Sequence[NewTask]) -> list[int]:
        """
        Insert all rows in one transaction: either every row is written or none.

        Returns the new row ids in input order.
        """
        if not items:
            return []
        for item in items:
            if not item.owner_id:
                raise ValueError("owner_id is required")
            if not item.title or not item.title.strip():
                raise ValueError("title is required")

        now = time.time()
        conn = self._get_conn()
        try:
            ids: list[int] = []
            with conn:
                for item in items:
                    cur = conn.execute(
                        "INSERT INTO todos(title, is_done, user_id, inserted_at) VALUES (?, ?, ?, ?)",
                        (item.title, int(item.is_done), item.owner_id, now),
                    )
                    if cur.lastrowid is None:
                        raise RuntimeError("SQLite did not return lastrowid for todos insert")
                    ids.append(int(cur.lastrowid))
            logger.debug("Inserted %d todos owner=%s", len(ids), items[0].owner_id)
            return ids
        finally:
            conn.close()

    def add_task(self, owner_id: str, title: str) -> TaskRecord:
        title = (title or "").strip()
        if not title:
            raise ValueError("title is required")
        (task_id,) = self.insert_batch([NewTask(title=title, owner_id=owner_id)])
        return self.get(owner_id, task_id)

    def get(self, owner_id: str, task_id: int) -> TaskRecord:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM todos WHERE id = ? AND user_id = ?",
                (int(task_id), owner_id),
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            raise TaskNotFound(task_id)
        return self._row_to_task(row)

    def list_for_owner(self, owner_id: str, limit: int = 500) -> list[TaskRecord]:
        """Newest first. Ties on inserted_at (same batch) keep insertion order."""
        if not owner_id:
            return []
        conn = self._get_conn()
        try:
            rows = conn.execute(
                """
                SELECT *
                FROM todos
                WHERE user_id = ?
                ORDER BY inserted_at DESC, id ASC
                    LIMIT ?
                """,
                (owner_id, int(limit)),
            ).fetchall()
            return [self._row_to_task(r) for r in rows]
        finally:
            conn.close()

    def set_done(self, owner_id: str, task_id: int, is_done: bool) -> TaskRecord:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "UPDATE todos SET is_done = ? WHERE id = ? AND user_id = ?",
                (int(bool(is_done)), int(task_id), owner_id),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise TaskNotFound(task_id)
        finally:
            conn.close()
        return self.get(owner_id, task_id)

    def toggle(self, owner_id: str, task_id: int) -> TaskRecord:
        current = self.get(owner_id, task_id)
        return self.set_done(owner_id, task_id, not current.is_done)

    def delete(self, owner_id: str, task_id: int) -> None:
        conn = self._get_conn()
        try:
            cur = conn.execute(
                "DELETE FROM todos WHERE id = ? AND user_id = ?",
                (int(task_id), owner_id),
            )
            conn.commit()
            if cur.rowcount != 1:
                raise TaskNotFound(task_id)
        finally:
            conn.close()

    def delete_for_owner(self, owner_id: str) -> int:
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM todos WHERE user_id = ?", (owner_id,))
            conn.commit()
            logger.info("Deleted %d todos owner=%s", cur.rowcount, owner_id)
            return int(cur.rowcount)
        finally:
            conn.close()
