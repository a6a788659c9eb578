"""
asset_db/base.py

Declarative base, timestamp mixin and schema helpers for the asset tables.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, func, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base shared by the IT and telecom asset records."""


class TimestampMixin:
    """
    Adds created_at / updated_at; updated_at is refreshed on every UPDATE.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=lambda: datetime.now(timezone.utc),
    )


def _register_models() -> None:
    import asset_db.models  # noqa: F401  registers ORM models on Base.metadata


def missing_asset_tables(engine: Engine) -> list[str]:
    """
    Return the sorted names of asset tables absent from the database.
    """

    _register_models()
    existing = set(inspect(engine).get_table_names())
    return sorted(set(Base.metadata.tables) - existing)


def init_schema(engine: Engine) -> None:
    """
    Create every asset table that does not exist yet.
    """

    _register_models()
    Base.metadata.create_all(bind=engine)
