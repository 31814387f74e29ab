# src/ai_todos/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the Gemini key is checked on first model call).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

ENV_PREFIX = "AI_TODOS"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Gemini ----
    gemini_api_key: Optional[str]
    gemini_base_url: str
    gemini_model: str
    llm_connect_timeout_seconds: float
    llm_read_timeout_seconds: float

    # ---- Decomposition bounds ----
    max_input_chars: int
    max_tasks: int
    max_title_length: int
    min_tasks_on_sparse_input: int
    temperature: float
    max_output_tokens: int

    # ---- HTTP API ----
    api_host: str
    api_port: int
    cors_origins: List[str]
    admin_token: Optional[str]

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    accounts_db_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "ai-todos")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        # Accept the bare GEMINI_API_KEY name too (that's what hosting secrets usually use).
        gemini_api_key = _first_env(_k("GEMINI_API_KEY"), "GEMINI_API_KEY", default=None)
        gemini_base_url = _env(
            _k("GEMINI_BASE_URL"), "https://generativelanguage.googleapis.com/v1beta"
        )
        gemini_model = _env(_k("GEMINI_MODEL"), "gemini-2.5-flash")

        connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 60.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/ai_todos"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        accounts_db_path = _env_path(_k("ACCOUNTS_DB_PATH"), data_dir / "accounts.sqlite3")

        admin_token = (_first_env(_k("ADMIN_TOKEN"), default="") or "").strip() or None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            gemini_api_key=gemini_api_key,
            gemini_base_url=gemini_base_url.rstrip("/"),
            gemini_model=gemini_model,
            llm_connect_timeout_seconds=connect_timeout,
            llm_read_timeout_seconds=max(read_timeout, connect_timeout),
            max_input_chars=_env_int(_k("MAX_INPUT_CHARS"), 4000),
            max_tasks=_env_int(_k("MAX_TASKS"), 12),
            max_title_length=_env_int(_k("MAX_TITLE_LENGTH"), 120),
            min_tasks_on_sparse_input=_env_int(_k("MIN_TASKS_ON_SPARSE_INPUT"), 3),
            temperature=_env_float(_k("TEMPERATURE"), 0.2),
            max_output_tokens=_env_int(_k("MAX_OUTPUT_TOKENS"), 800),
            api_host=_env(_k("API_HOST"), "127.0.0.1"),
            api_port=_env_int(_k("API_PORT"), 8000),
            cors_origins=_env_list(_k("CORS_ORIGINS"), ["*"]),
            admin_token=admin_token,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            accounts_db_path=accounts_db_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
