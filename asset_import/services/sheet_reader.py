"""
asset_import/services/sheet_reader.py

Decodes uploaded workbook bytes into raw rows of Python scalars.

CSV uploads go through the csv module so ragged banner rows survive;
workbooks go through pandas. Only the first worksheet is read, with no
header inference: header detection belongs to the import pipeline.
"""

from __future__ import annotations

import base64
import binascii
import csv
import io
import logging
import math
import zipfile
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd
from openpyxl.utils.exceptions import InvalidFileException

from asset_import.domain.asset_import import CellValue

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = frozenset({".xlsx", ".xlsm"})
CSV_EXTENSIONS = frozenset({".csv"})
SPREADSHEET_EXTENSIONS = EXCEL_EXTENSIONS | CSV_EXTENSIONS
_SNIFF_SAMPLE_SIZE = 4096
_CSV_DELIMITERS = ",;\t"

_DECODE_ERRORS: tuple[type[BaseException], ...] = (
    ValueError,
    KeyError,
    OSError,
    UnicodeDecodeError,
    zipfile.BadZipFile,
    InvalidFileException,
    csv.Error,
)


class SheetDecodeError(ValueError):
    """
    Raised when uploaded content cannot be read as a spreadsheet.
    """


def decode_data_url(payload: str) -> bytes:
    """
    Decode a base64 payload, with or without a ``data:...;base64,`` prefix.
    """

    encoded = payload.split(",", 1)[1] if payload.startswith("data:") and "," in payload else payload
    try:
        return base64.b64decode(encoded.strip(), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise SheetDecodeError("File payload is not valid base64 data.") from exc


def read_sheet(content: bytes | str, *, filename: str | None = None) -> list[list[CellValue]]:
    """
    Return the first worksheet of ``content`` as a list of raw rows.

    ``content`` may be raw bytes or a base64 data URL string. The file name
    selects the decoder; without one the content is treated as ``.xlsx``.
    """

    raw = decode_data_url(content) if isinstance(content, str) else content
    if not raw:
        raise SheetDecodeError("Uploaded file is empty.")

    suffix = Path(filename).suffix.lower() if filename else ".xlsx"
    if suffix not in SPREADSHEET_EXTENSIONS:
        allowed = ", ".join(sorted(SPREADSHEET_EXTENSIONS))
        raise SheetDecodeError(f"Unsupported spreadsheet type '{suffix}'. Allowed: {allowed}.")

    try:
        if suffix in CSV_EXTENSIONS:
            rows = _read_csv_rows(raw)
        else:
            rows = _read_excel_rows(raw)
    except _DECODE_ERRORS as exc:
        raise SheetDecodeError(f"Could not read spreadsheet: {exc}") from exc

    logger.debug("Spreadsheet decoded filename=%r rows=%d", filename, len(rows))
    return rows


def _read_csv_rows(raw: bytes) -> list[list[CellValue]]:
    text = raw.decode("utf-8-sig")
    delimiter = _detect_delimiter(text[:_SNIFF_SAMPLE_SIZE])
    return [
        [cell if cell.strip() else None for cell in row]
        for row in csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    ]


def _detect_delimiter(sample: str) -> str:
    try:
        return csv.Sniffer().sniff(sample, delimiters=_CSV_DELIMITERS).delimiter
    except csv.Error:
        # Banner rows break the sniffer's per-line consistency check.
        counts = {delimiter: sample.count(delimiter) for delimiter in _CSV_DELIMITERS}
        best = max(counts, key=counts.__getitem__)
        return best if counts[best] else ","


def _read_excel_rows(raw: bytes) -> list[list[CellValue]]:
    frame = pd.read_excel(
        io.BytesIO(raw),
        sheet_name=0,
        header=None,
        engine="openpyxl",
    )
    return [
        [_to_scalar(value) for value in row]
        for row in frame.itertuples(index=False, name=None)
    ]


def _to_scalar(value: Any) -> CellValue:
    if value is None or value is pd.NaT:
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and math.isnan(value):
        return None
    return value
