"""
asset_db/config.py

Environment-driven settings for the asset record store.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SQLITE_PATH = PROJECT_ROOT / "assets.db"

_ENV_FILES = (".env", ".env.local")
_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_env_files(root: Path | None = None) -> None:
    """
    Copy KEY=VALUE lines from `.env` then `.env.local` into os.environ.

    Variables already present in the process environment win.
    """

    base_dir = root or PROJECT_ROOT
    for env_path in (base_dir / name for name in _ENV_FILES):
        if not env_path.is_file():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            key, sep, value = raw_line.strip().partition("=")
            key = key.strip()
            if not sep or not key or key.startswith("#"):
                continue
            os.environ.setdefault(key, value.strip().strip("\"'"))


def normalize_database_url(url: str) -> str:
    """
    Point postgres URLs at the psycopg driver; SQLite URLs pass through.
    """

    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def resolve_database_url() -> str:
    """
    Return DATABASE_URL, or a SQLite file beside the project for a
    single-workstation install.
    """

    load_env_files()
    configured = (os.getenv("DATABASE_URL") or "").strip()
    if configured:
        return normalize_database_url(configured)
    return f"sqlite:///{DEFAULT_SQLITE_PATH}"


def _env_flag(name: str) -> bool | None:
    raw_value = os.getenv(name)
    if raw_value is None:
        return None
    return raw_value.strip().lower() in _TRUE_VALUES


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.environ[name])
    except (KeyError, ValueError):
        return default


@dataclass(frozen=True)
class DatabaseSettings:
    """
    Connection settings for the IT and telecom asset tables.
    """

    url: str
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800
    auto_create_schema: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


@lru_cache(maxsize=1)
def get_database_settings() -> DatabaseSettings:
    """
    Return cached asset store settings.

    Missing asset tables are created on startup by default only for SQLite;
    DB_AUTO_CREATE_SCHEMA overrides that either way.
    """

    url = resolve_database_url()
    auto_create = _env_flag("DB_AUTO_CREATE_SCHEMA")
    return DatabaseSettings(
        url=url,
        echo=bool(_env_flag("SQL_ECHO")),
        pool_size=max(1, _env_int("DB_POOL_SIZE", 5)),
        max_overflow=max(0, _env_int("DB_MAX_OVERFLOW", 10)),
        pool_recycle=_env_int("DB_POOL_RECYCLE", 1800),
        auto_create_schema=url.startswith("sqlite") if auto_create is None else auto_create,
    )
