"""
asset_import/schemas package marker.
"""

from asset_import.schemas.asset_import import AssetImportReportResponse, ColumnMappingResponse

__all__ = [
    "AssetImportReportResponse",
    "ColumnMappingResponse",
]
