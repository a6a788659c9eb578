"""
asset_import/domain/asset_import.py

Domain models shared by the spreadsheet import pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Sequence, Union

CellValue = Union[str, int, float, bool, date, datetime, None]
RawRow = Sequence[CellValue]
RawSheet = Sequence[RawRow]
CandidateRecord = dict[str, Any]


class AssetKind:
    IT_ASSET = "it_asset"
    TELECOM_ASSET = "telecom_asset"


ASSET_KINDS: tuple[str, ...] = (AssetKind.IT_ASSET, AssetKind.TELECOM_ASSET)

# Plural table-style names sent by older desktop clients.
_ASSET_KIND_ALIASES: dict[str, str] = {
    "it_assets": AssetKind.IT_ASSET,
    "telecom_assets": AssetKind.TELECOM_ASSET,
}


def parse_asset_kind(value: str) -> str:
    """
    Resolve a caller-supplied asset kind into one of ASSET_KINDS.
    """

    normalized = (value or "").strip().lower()
    normalized = _ASSET_KIND_ALIASES.get(normalized, normalized)
    if normalized not in ASSET_KINDS:
        raise ValueError(
            f"Unknown asset kind '{value}'. Allowed values: {sorted(ASSET_KINDS)}."
        )
    return normalized


class ITDeviceType:
    DESKTOP = "desktop"
    LAPTOP = "laptop"
    PHONE = "phone"
    TABLET = "tablet"
    PRINTER = "printer"
    MONITOR = "monitor"
    ROUTER = "router"
    SWITCH = "switch"
    SERVER = "server"


IT_DEVICE_TYPES: tuple[str, ...] = (
    ITDeviceType.DESKTOP,
    ITDeviceType.LAPTOP,
    ITDeviceType.PHONE,
    ITDeviceType.TABLET,
    ITDeviceType.PRINTER,
    ITDeviceType.MONITOR,
    ITDeviceType.ROUTER,
    ITDeviceType.SWITCH,
    ITDeviceType.SERVER,
)


class TelecomProvider:
    IAM = "IAM"
    INWI = "INWI"
    ORANGE = "ORANGE"


ACCEPTED_PROVIDERS: tuple[str, ...] = (
    TelecomProvider.IAM,
    TelecomProvider.INWI,
    TelecomProvider.ORANGE,
)


class ValueType:
    TEXT = "text"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ColumnMapping:
    """
    One source header resolved to one canonical field.
    """

    original_header: str
    mapped_field: str
    confidence: float
    value_type: str
    column_index: int
    sample_values: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "original_header": self.original_header,
            "mapped_field": self.mapped_field,
            "confidence": self.confidence,
            "value_type": self.value_type,
            "sample_values": list(self.sample_values),
        }


@dataclass(frozen=True)
class ImportReport:
    """
    End-of-run import summary handed back to the caller.
    """

    success: bool
    message: str
    total_rows: int = 0
    created_count: int = 0
    errors: tuple[str, ...] = ()
    column_mappings: tuple[ColumnMapping, ...] = ()
    sample_rows: tuple[CandidateRecord, ...] = field(default_factory=tuple)

    @classmethod
    def failed(cls, message: str, *, errors: Sequence[str] = ()) -> ImportReport:
        return cls(success=False, message=message, errors=tuple(errors or (message,)))

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "total_rows": self.total_rows,
            "created_count": self.created_count,
            "errors": list(self.errors),
            "column_mappings": [mapping.to_dict() for mapping in self.column_mappings],
            "sample_rows": [dict(row) for row in self.sample_rows],
        }
