# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Do NOT commit real secrets. Use .env (local, gitignored).

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "AI_TODOS_APP_NAME": "App display name (default: ai-todos).",
    "AI_TODOS_LOG_LEVEL": "Console logging level (default: INFO).",
    # Gemini
    "AI_TODOS_GEMINI_API_KEY": "Gemini API key (GEMINI_API_KEY is accepted too).",
    "AI_TODOS_GEMINI_BASE_URL": (
        "Gemini REST base URL (default: https://generativelanguage.googleapis.com/v1beta)."
    ),
    "AI_TODOS_GEMINI_MODEL": "Model name (default: gemini-2.5-flash).",
    "AI_TODOS_LLM_CONNECT_TIMEOUT_SECONDS": "Connect timeout for the model call (default: 5).",
    "AI_TODOS_LLM_READ_TIMEOUT_SECONDS": "Read timeout for the model call (default: 60).",
    # Decomposition bounds
    "AI_TODOS_MAX_INPUT_CHARS": "Hard ceiling on input text length (default: 4000).",
    "AI_TODOS_MAX_TASKS": "Max todos per decomposition (default: 12).",
    "AI_TODOS_MAX_TITLE_LENGTH": "Max todo title length (default: 120).",
    "AI_TODOS_MIN_TASKS_ON_SPARSE_INPUT": "Upper end of the 1-N range asked for short text (default: 3).",
    "AI_TODOS_TEMPERATURE": "Model temperature (default: 0.2).",
    "AI_TODOS_MAX_OUTPUT_TOKENS": "Model output token cap (default: 800).",
    # HTTP API
    "AI_TODOS_API_HOST": "Bind address (default: 127.0.0.1).",
    "AI_TODOS_API_PORT": "Port (default: 8000).",
    "AI_TODOS_CORS_ORIGINS": "Comma/space separated allowed origins (default: *).",
    "AI_TODOS_ADMIN_TOKEN": "Privileged credential; account deletion is refused without it.",
    # Paths (gitignored)
    "AI_TODOS_DATA_DIR": "Local data directory (default: .local/ai_todos).",
    "AI_TODOS_TASKS_DB_PATH": "TaskStore SQLite path (default: <data_dir>/tasks.sqlite3).",
    "AI_TODOS_ACCOUNTS_DB_PATH": "AccountStore SQLite path (default: <data_dir>/accounts.sqlite3).",
}
