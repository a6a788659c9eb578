"""
asset_import/schemas/asset_import.py

Response schemas for spreadsheet asset import endpoints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from asset_import.domain.asset_import import ImportReport


class ColumnMappingResponse(BaseModel):
    """
    API response model for one resolved header.
    """

    original_header: str
    mapped_field: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    value_type: str
    sample_values: list[Any] = Field(default_factory=list)


class AssetImportReportResponse(BaseModel):
    """
    API response model for a preview or execute run.
    """

    success: bool
    message: str
    total_rows: int = Field(..., ge=0)
    created_count: int = Field(..., ge=0)
    errors: list[str] = Field(default_factory=list)
    column_mappings: list[ColumnMappingResponse] = Field(default_factory=list)
    sample_rows: list[dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ImportReport) -> AssetImportReportResponse:
        return cls.model_validate(report.to_dict())
