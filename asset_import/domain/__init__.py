"""
asset_import/domain package marker.
"""

from asset_import.domain.asset_import import (
    ACCEPTED_PROVIDERS,
    ASSET_KINDS,
    IT_DEVICE_TYPES,
    AssetKind,
    CandidateRecord,
    ColumnMapping,
    ImportReport,
    ITDeviceType,
    RawRow,
    RawSheet,
    TelecomProvider,
    ValueType,
    parse_asset_kind,
)

__all__ = [
    "ACCEPTED_PROVIDERS",
    "ASSET_KINDS",
    "IT_DEVICE_TYPES",
    "AssetKind",
    "CandidateRecord",
    "ColumnMapping",
    "ImportReport",
    "ITDeviceType",
    "RawRow",
    "RawSheet",
    "TelecomProvider",
    "ValueType",
    "parse_asset_kind",
]
