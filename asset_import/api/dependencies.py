"""
asset_import/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import File, HTTPException, UploadFile, status

from asset_import.services.sheet_reader import SPREADSHEET_EXTENSIONS

SPREADSHEET_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel.sheet.macroenabled.12",
}


def get_spreadsheet_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a workbook or CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_spreadsheet_filename = Path(filename).suffix in SPREADSHEET_EXTENSIONS
    is_spreadsheet_content_type = content_type in SPREADSHEET_CONTENT_TYPES

    if not is_spreadsheet_filename and not is_spreadsheet_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only .xlsx, .xlsm or .csv spreadsheets are allowed; legacy .xls workbooks are not supported.",
        )

    return file
