"""
asset_import/main.py

FastAPI application factory for the spreadsheet asset import API.
"""

from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from asset_db.base import init_schema, missing_asset_tables
from asset_db.config import DatabaseSettings, get_database_settings, load_env_files
from asset_db.session import get_engine

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _configure_logging() -> None:
    level_name = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)


def prepare_asset_store(engine: Engine, settings: DatabaseSettings) -> None:
    """
    Check that the asset store answers and holds both asset tables.

    Missing tables are created when `settings.auto_create_schema` is set;
    otherwise a RuntimeError naming them aborts startup.
    """

    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise RuntimeError("Asset store unavailable.") from exc

    missing = missing_asset_tables(engine)
    if not missing:
        logger.info("Asset store ready backend=%s", engine.url.get_backend_name())
        return

    if settings.auto_create_schema:
        init_schema(engine)
        logger.info("Created missing asset tables tables=%s", ",".join(missing))
        return

    logger.critical(
        "Asset tables missing tables=%s hint=%s",
        ",".join(missing),
        "set DB_AUTO_CREATE_SCHEMA=true or create them and restart",
    )
    raise RuntimeError(f"Asset tables missing from the database: {', '.join(missing)}.")


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    prepare_asset_store(get_engine(), get_database_settings())
    yield


def create_app() -> FastAPI:
    """
    Build the import API: the /imports router plus a /health check.
    """

    load_env_files()
    _configure_logging()

    from asset_import.api.routers import asset_import_router

    application = FastAPI(title="Asset Import API", version="1.0.0", lifespan=_lifespan)
    application.include_router(asset_import_router)

    @application.get("/health")
    def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
