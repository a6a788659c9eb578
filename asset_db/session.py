"""
asset_db/session.py

Engine and session wiring for the asset record store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

from asset_db.config import DatabaseSettings, get_database_settings

logger = logging.getLogger(__name__)

_SUPPORTED_BACKENDS = ("postgresql", "sqlite")


def create_db_engine(settings: DatabaseSettings) -> Engine:
    """
    Build an engine for the asset store described by `settings`.
    """

    backend = make_url(settings.url).get_backend_name()
    if backend not in _SUPPORTED_BACKENDS:
        raise RuntimeError(f"Unsupported asset store backend '{backend}'; use PostgreSQL or SQLite.")

    if settings.is_sqlite:
        # Request handlers run in a worker thread pool.
        return create_engine(
            settings.url,
            echo=settings.echo,
            connect_args={"check_same_thread": False},
        )

    return create_engine(
        settings.url,
        echo=settings.echo,
        pool_pre_ping=True,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        pool_recycle=settings.pool_recycle,
    )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    """Return the process-wide asset store engine."""
    engine = create_db_engine(get_database_settings())
    logger.info("Asset store engine ready backend=%s", engine.url.get_backend_name())
    return engine


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request."""
    with get_session_factory()() as db:
        yield db
