"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from sqlalchemy.pool import StaticPool

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Wellnest"
    DB_FILENAME = "wellnest.db"
    ERROR_DISMISS_SECONDS = 3
    STREAK_LOOKBACK = 30
    RECENT_CHECKINS = 3
    TESTING = False

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("WELLNEST_SECRET_KEY", "replace-me")
        self.DEV_MODE = _env_bool("WELLNEST_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.DATABASE_URL = os.getenv("WELLNEST_DATABASE_URL", self._build_sqlite_url())
        self.TIMEZONE = os.getenv("WELLNEST_TIMEZONE") or None
        self.INSIGHTS_URL = os.getenv("WELLNEST_INSIGHTS_URL") or None
        self.INSIGHTS_API_KEY = os.getenv("WELLNEST_INSIGHTS_API_KEY") or None
        self.INSIGHTS_TIMEOUT = _env_float("WELLNEST_INSIGHTS_TIMEOUT", 10.0)
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("WELLNEST_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory holding the SQLite file and logs."""

        data_root = os.getenv("WELLNEST_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if not self.DATABASE_URL.startswith("sqlite"):
            return {"pool_pre_ping": True}
        engine_options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
        if self.DATABASE_URL in {"sqlite://", "sqlite:///:memory:"}:
            # Every session must see the same in-memory database.
            engine_options["poolclass"] = StaticPool
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite: in-memory database, no secrets."""

    __test__ = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
        self.DATABASE_URL = os.getenv("WELLNEST_TEST_DATABASE_URL", "sqlite://")
        self.INSIGHTS_URL = None
