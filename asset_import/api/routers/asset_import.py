"""
asset_import/api/routers/asset_import.py

Spreadsheet asset import HTTP endpoints.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from asset_import.api.dependencies import get_spreadsheet_upload
from asset_import.domain.asset_import import parse_asset_kind
from asset_import.repositories.asset_record_repository import AssetRecordRepository
from asset_import.schemas.asset_import import AssetImportReportResponse
from asset_import.services.asset_import_service import (
    AssetImportService,
    get_asset_import_service,
)
from asset_import.services.sheet_reader import SPREADSHEET_EXTENSIONS
from asset_db.session import get_db

router = APIRouter(prefix="/imports", tags=["asset-import"])

_CSV_CONTENT_TYPES = {"text/csv", "application/csv"}


def _resolve_asset_kind(asset_kind: str) -> str:
    try:
        return parse_asset_kind(asset_kind)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc


def _decoder_filename(file: UploadFile) -> str:
    # Uploads accepted on MIME type alone still need a suffix for the reader.
    filename = (file.filename or "").strip()
    if Path(filename).suffix.lower() in SPREADSHEET_EXTENSIONS:
        return filename
    content_type = (file.content_type or "").strip().lower()
    suffix = ".csv" if content_type in _CSV_CONTENT_TYPES else ".xlsx"
    return f"{filename or 'upload'}{suffix}"


@router.post("/{asset_kind}/preview", response_model=AssetImportReportResponse)
def preview_import(
    asset_kind: str,
    file: UploadFile = Depends(get_spreadsheet_upload),
    import_service: AssetImportService = Depends(get_asset_import_service),
) -> AssetImportReportResponse:
    """
    Analyze one spreadsheet and return mappings plus the first rows, without writing.
    """

    kind = _resolve_asset_kind(asset_kind)
    try:
        report = import_service.preview_upload(
            file.file.read(),
            kind,
            filename=_decoder_filename(file),
        )
    finally:
        file.file.close()

    return AssetImportReportResponse.from_report(report)


@router.post("/{asset_kind}/execute", response_model=AssetImportReportResponse)
def execute_import(
    asset_kind: str,
    file: UploadFile = Depends(get_spreadsheet_upload),
    db: Session = Depends(get_db),
    import_service: AssetImportService = Depends(get_asset_import_service),
) -> AssetImportReportResponse:
    """
    Import every row of one spreadsheet, isolating per-row failures.
    """

    kind = _resolve_asset_kind(asset_kind)
    try:
        report = import_service.execute_upload(
            file.file.read(),
            kind,
            AssetRecordRepository(db),
            filename=_decoder_filename(file),
        )
    finally:
        file.file.close()

    return AssetImportReportResponse.from_report(report)
