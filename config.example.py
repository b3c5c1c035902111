# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKS_APP_NAME": "App display name (default: task-tracker).",
    "TASKS_LOG_LEVEL": "Console logging level (default: INFO; the console never shows less than WARNING).",
    # Task API
    "TASKS_API_URL": "Base URL of the task backend (default: http://localhost:3001).",
    "TASKS_API_TIMEOUT_SECONDS": "Read/write timeout per request (default: 10).",
    "TASKS_API_CONNECT_TIMEOUT_SECONDS": "Connect timeout per request (default: 5).",
    "TASKS_API_CONNECT_RETRIES": "Connection retries done by the HTTP transport (default: 0).",
    # Paths (gitignored)
    "TASKS_DATA_DIR": "Local data directory for logs and cache (default: .local/task-tracker).",
    "TASKS_CACHE_ENABLED": "Keep a JSON copy of the last known tasks (true/false, default: true).",
    "TASKS_CACHE_PATH": "Cache file path (default: <data_dir>/tasks_cache.json).",
    # View
    "TASKS_PAGE_SIZE": "Tasks per page in the console (default: 5).",
}
