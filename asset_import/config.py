"""
asset_import/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from asset_db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


@dataclass(frozen=True)
class AssetImportSettings:
    """
    Runtime settings for spreadsheet asset imports.
    """

    match_threshold: float = 0.6
    preview_rows: int = 5
    sample_rows: int = 5
    max_reported_errors: int = 1000
    log_row_errors: bool = True


@lru_cache(maxsize=1)
def get_asset_import_settings() -> AssetImportSettings:
    """
    Return cached asset import settings from environment variables.
    """

    return AssetImportSettings(
        match_threshold=min(1.0, max(0.0, _get_float_env("ASSET_IMPORT_MATCH_THRESHOLD", 0.6))),
        preview_rows=max(1, _get_int_env("ASSET_IMPORT_PREVIEW_ROWS", 5)),
        sample_rows=max(0, _get_int_env("ASSET_IMPORT_SAMPLE_ROWS", 5)),
        max_reported_errors=max(1, _get_int_env("ASSET_IMPORT_MAX_REPORTED_ERRORS", 1000)),
        log_row_errors=_get_bool_env("ASSET_IMPORT_LOG_ROW_ERRORS", True),
    )
