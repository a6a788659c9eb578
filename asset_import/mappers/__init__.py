"""
asset_import/mappers package marker.
"""

from asset_import.mappers.column_mapper import DEFAULT_MATCH_THRESHOLD, ColumnMapper
from asset_import.mappers.field_catalog import (
    DEFAULT_FIELD_CATALOG,
    HEADER_KEYWORDS,
    FieldCatalog,
    FieldSpec,
)
from asset_import.mappers.header_locator import HeaderLocator, LocatedHeader, SheetStructureError
from asset_import.mappers.similarity import normalize_header, similarity

__all__ = [
    "DEFAULT_FIELD_CATALOG",
    "DEFAULT_MATCH_THRESHOLD",
    "HEADER_KEYWORDS",
    "ColumnMapper",
    "FieldCatalog",
    "FieldSpec",
    "HeaderLocator",
    "LocatedHeader",
    "SheetStructureError",
    "normalize_header",
    "similarity",
]
