"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on bad input."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        return default


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "HabitFlow"
    DB_FILENAME = "habitflow.db"
    DEEPSEEK_DEFAULT_URL = "https://api.deepseek.com/v1/chat/completions"
    # Applied to every new SQLite connection.
    SQLITE_PRAGMAS = {"journal_mode": "wal", "busy_timeout": "5000"}

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("HABITFLOW_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("HABITFLOW_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("HABITFLOW_DATABASE_URL", self._build_sqlite_url())

        self.ROLLOVER_HOUR = _env_int("HABITFLOW_ROLLOVER_HOUR", 0)
        self.ROLLOVER_MINUTE = _env_int("HABITFLOW_ROLLOVER_MINUTE", 0)
        self.SCHEDULER_ENABLED = _env_bool("HABITFLOW_SCHEDULER", default=False)

        self.DEEPSEEK_API_KEY = os.getenv("DEEPSEEK_API_KEY")
        self.DEEPSEEK_API_URL = os.getenv("DEEPSEEK_API_URL", self.DEEPSEEK_DEFAULT_URL)
        self.DEEPSEEK_MODEL = os.getenv("DEEPSEEK_MODEL", "deepseek-chat")
        self.DEEPSEEK_TIMEOUT = _env_int("DEEPSEEK_TIMEOUT", 30)

        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("HABITFLOW_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("HABITFLOW_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        """Construct the default SQLite URL inside the data directory."""

        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestConfig(BaseConfig):
    """Isolated configuration for the test-suite (in-memory database)."""

    DEBUG = False
    TESTING = True
    SQLITE_PRAGMAS = {"busy_timeout": "5000"}

    def __init__(self) -> None:
        super().__init__()
        self.DATABASE_URL = "sqlite://"
        self.SCHEDULER_ENABLED = False

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        from sqlalchemy.pool import StaticPool

        # A single shared connection keeps the in-memory database alive across sessions.
        return {"connect_args": {"check_same_thread": False}, "poolclass": StaticPool}
