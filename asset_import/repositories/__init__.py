"""
asset_import/repositories package marker.
"""

from asset_import.repositories.asset_record_repository import AssetRecordRepository

__all__ = [
    "AssetRecordRepository",
]
