# src/ai_todos/accounts/store.py

from __future__ import annotations

import contextlib
import logging
import secrets
import sqlite3
import time
import uuid
from pathlib import Path

from ..errors import ConfigurationMissing, NotFound, Unauthenticated

logger = logging.getLogger(__name__)


class AccountNotFound(NotFound):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class AccountStore:
    """
    SQLite identity store: users and their opaque session tokens.

    Thread-safety:
    - each method opens its own SQLite connection

    Deleting a user is privileged: the caller must present the admin credential
    the store was opened with.
    """

    def __init__(
        self,
        db_path: str | Path = "accounts.sqlite3",
        *,
        admin_token: str | None = None,
    ) -> None:
        self._db_path = Path(db_path)
        self._admin_token = admin_token or None
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        logger.info("AccountStore ready db=%s", self._db_path)

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.DatabaseError):
            conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.executescript(
                """
                CREATE TABLE IF NOT EXISTS users (
                    id TEXT PRIMARY KEY,
                    email TEXT NOT NULL UNIQUE,
                    created_at REAL NOT NULL
                );
                CREATE TABLE IF NOT EXISTS tokens (
                    token TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
                    created_at REAL NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_tokens_user ON tokens(user_id);
                """
            )
            conn.commit()
        finally:
            conn.close()

    def create_user(self, email: str) -> str:
        email = (email or "").strip().lower()
        if not email:
            raise ValueError("email is required")
        user_id = uuid.uuid4().hex
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO users(id, email, created_at) VALUES (?, ?, ?)",
                (user_id, email, time.time()),
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("User created id=%s", user_id)
        return user_id

    def find_user_by_email(self, email: str) -> str | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT id FROM users WHERE email = ?", ((email or "").strip().lower(),)
            ).fetchone()
            return str(row["id"]) if row else None
        finally:
            conn.close()

    def user_exists(self, user_id: str) -> bool:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT 1 FROM users WHERE id = ?", (user_id,)).fetchone()
            return row is not None
        finally:
            conn.close()

    def issue_token(self, user_id: str) -> str:
        if not self.user_exists(user_id):
            raise AccountNotFound(user_id)
        token = secrets.token_urlsafe(32)
        conn = self._get_conn()
        try:
            conn.execute(
                "INSERT INTO tokens(token, user_id, created_at) VALUES (?, ?, ?)",
                (token, user_id, time.time()),
            )
            conn.commit()
        finally:
            conn.close()
        return token

    def resolve_token(self, token: str) -> str | None:
        if not token:
            return None
        conn = self._get_conn()
        try:
            row = conn.execute(
                """
                SELECT users.id
                FROM tokens JOIN users ON users.id = tokens.user_id
                WHERE tokens.token = ?
                """,
                (token,),
            ).fetchone()
            return str(row["id"]) if row else None
        finally:
            conn.close()

    def verify_admin(self, admin_token: str | None) -> None:
        if self._admin_token is None:
            raise ConfigurationMissing("AI_TODOS_ADMIN_TOKEN")
        if not admin_token or not secrets.compare_digest(
            admin_token.encode("utf-8"), self._admin_token.encode("utf-8")
        ):
            raise Unauthenticated("Admin credential rejected")

    def delete_user(self, user_id: str, *, admin_token: str | None) -> None:
        """Irreversible. Tokens go with the user (ON DELETE CASCADE)."""
        self.verify_admin(admin_token)
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            conn.commit()
            if cur.rowcount != 1:
                raise AccountNotFound(user_id)
        finally:
            conn.close()
        logger.info("User deleted id=%s", user_id)
