"""
asset_import/services package marker.
"""

from asset_import.services.asset_import_service import (
    AssetImportService,
    ImportState,
    RecordStore,
    RecordStoreError,
    get_asset_import_service,
)
from asset_import.services.record_synthesizer import (
    REQUIRED_FIELDS,
    RecordSynthesizer,
    infer_device_type,
)
from asset_import.services.sheet_reader import SheetDecodeError, decode_data_url, read_sheet

__all__ = [
    "AssetImportService",
    "ImportState",
    "RecordStore",
    "RecordStoreError",
    "get_asset_import_service",
    "REQUIRED_FIELDS",
    "RecordSynthesizer",
    "infer_device_type",
    "SheetDecodeError",
    "decode_data_url",
    "read_sheet",
]
