"""
asset_db/models/telecom_asset.py

Persisted SIM line record.
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import CheckConstraint, Date, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from asset_import.domain.asset_import import ACCEPTED_PROVIDERS
from asset_db.base import Base, TimestampMixin


class TelecomAssetRecord(Base, TimestampMixin):
    __tablename__ = "telecom_assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    sim_number: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    sim_owner: Mapped[str] = mapped_column(String(255), nullable=False)
    provider: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment=", ".join(ACCEPTED_PROVIDERS),
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, comment="Activation date")
    zone: Mapped[str | None] = mapped_column(String(120), nullable=True)
    department: Mapped[str | None] = mapped_column(String(120), nullable=True)
    subscription_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    data_plan: Mapped[str | None] = mapped_column(String(64), nullable=True)
    pin_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    puk_code: Mapped[str | None] = mapped_column(String(16), nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "provider IN (" + ", ".join(f"'{code}'" for code in ACCEPTED_PROVIDERS) + ")",
            name="ck_telecom_assets_provider",
        ),
        Index("ix_telecom_assets_provider", "provider"),
        Index("ix_telecom_assets_sim_owner", "sim_owner"),
    )
