from __future__ import annotations

from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from asset_import.main import prepare_asset_store
from asset_db.base import init_schema, missing_asset_tables
from asset_db.config import DatabaseSettings
from asset_db.session import create_db_engine


@pytest.fixture
def engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    yield engine
    engine.dispose()


def test_empty_database_reports_both_asset_tables(engine: Engine) -> None:
    assert missing_asset_tables(engine) == ["it_assets", "telecom_assets"]

    init_schema(engine)

    assert missing_asset_tables(engine) == []


def test_missing_tables_abort_startup_without_auto_create(engine: Engine) -> None:
    settings = DatabaseSettings(url="sqlite://", auto_create_schema=False)

    with pytest.raises(RuntimeError, match="it_assets, telecom_assets"):
        prepare_asset_store(engine, settings)

    assert missing_asset_tables(engine) == ["it_assets", "telecom_assets"]


def test_missing_tables_are_created_with_auto_create(engine: Engine) -> None:
    settings = DatabaseSettings(url="sqlite://", auto_create_schema=True)

    prepare_asset_store(engine, settings)

    assert missing_asset_tables(engine) == []


def test_unreachable_store_raises_runtime_error(tmp_path) -> None:
    settings = DatabaseSettings(url=f"sqlite:///{tmp_path / 'missing' / 'assets.db'}")
    engine = create_db_engine(settings)

    with pytest.raises(RuntimeError, match="Asset store unavailable"):
        prepare_asset_store(engine, settings)
    engine.dispose()


def test_unsupported_backend_is_rejected() -> None:
    with pytest.raises(RuntimeError, match="mysql"):
        create_db_engine(DatabaseSettings(url="mysql://u:p@db/assets"))


def test_sqlite_url_builds_sqlite_engine() -> None:
    engine = create_db_engine(DatabaseSettings(url="sqlite://"))

    assert engine.url.get_backend_name() == "sqlite"
    assert engine.dialect.name == "sqlite"
    engine.dispose()
