"""
asset_db/models/it_asset.py

Persisted IT equipment record (computers, printers, network gear).
"""

from __future__ import annotations

import datetime as dt

from sqlalchemy import Boolean, Date, Float, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from asset_import.domain.asset_import import IT_DEVICE_TYPES
from asset_db.base import Base, TimestampMixin


class ITAssetRecord(Base, TimestampMixin):
    __tablename__ = "it_assets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    device_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment=", ".join(IT_DEVICE_TYPES),
    )
    brand: Mapped[str] = mapped_column(String(120), nullable=False)
    model: Mapped[str] = mapped_column(String(120), nullable=False)
    serial_number: Mapped[str] = mapped_column(String(120), nullable=False, unique=True)
    owner_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False, comment="Acquisition date")
    hostname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ticket_number: Mapped[str | None] = mapped_column(String(120), nullable=True)
    warranty_expiration: Mapped[dt.date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(32), nullable=False, default="active")
    assigned_to: Mapped[str | None] = mapped_column(String(255), nullable=True)
    department: Mapped[str | None] = mapped_column(String(120), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    processor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ram_gb: Mapped[float | None] = mapped_column(Float, nullable=True)
    disk_gb: Mapped[float | None] = mapped_column(Float, nullable=True)
    os: Mapped[str | None] = mapped_column(String(120), nullable=True)
    imei: Mapped[str | None] = mapped_column(String(64), nullable=True)
    has_mouse: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_keyboard: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_screen: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    has_headphone: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("ix_it_assets_device_type", "device_type"),
        Index("ix_it_assets_department", "department"),
        Index("ix_it_assets_owner_name", "owner_name"),
    )
