# src/task_tracker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every key has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKS"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


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

    # ---- Task API ----
    api_url: str
    api_timeout_seconds: float
    api_connect_timeout_seconds: float
    api_connect_retries: int

    # ---- Local data (ignored by git) ----
    data_dir: Path
    cache_enabled: bool
    cache_path: Path

    # ---- View defaults ----
    page_size: int

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-tracker").strip() or "task-tracker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        api_url = _env(_k("API_URL"), "http://localhost:3001").strip() or "http://localhost:3001"
        api_timeout_seconds = max(0.1, _env_float(_k("API_TIMEOUT_SECONDS"), 10.0))
        api_connect_timeout_seconds = max(0.1, _env_float(_k("API_CONNECT_TIMEOUT_SECONDS"), 5.0))
        api_connect_retries = max(0, _env_int(_k("API_CONNECT_RETRIES"), 0))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-tracker"))
        cache_enabled = _env_bool(_k("CACHE_ENABLED"), True)
        cache_path = _env_path(_k("CACHE_PATH"), data_dir / "tasks_cache.json")

        page_size = max(1, _env_int(_k("PAGE_SIZE"), 5))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            api_url=api_url,
            api_timeout_seconds=api_timeout_seconds,
            api_connect_timeout_seconds=api_connect_timeout_seconds,
            api_connect_retries=api_connect_retries,
            data_dir=data_dir,
            cache_enabled=cache_enabled,
            cache_path=cache_path,
            page_size=page_size,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
