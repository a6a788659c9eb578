"""
asset_import/mappers/header_locator.py

Finds the column header row inside a decoded sheet that may start with
title banners, blank spacer rows or free-form metadata.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from asset_import.domain.asset_import import RawRow, RawSheet
from asset_import.mappers.field_catalog import HEADER_KEYWORDS

logger = logging.getLogger(__name__)

MIN_SHEET_ROWS = 2


class SheetStructureError(ValueError):
    """
    Raised when a sheet cannot hold a header row plus at least one data row.
    """


@dataclass(frozen=True)
class LocatedHeader:
    """
    Header row position plus the non-empty rows that follow it.
    """

    header_index: int
    headers: tuple[Any, ...]
    data_rows: tuple[tuple[Any, ...], ...]


def is_blank_cell(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def is_blank_row(row: RawRow | None) -> bool:
    return not row or all(is_blank_cell(value) for value in row)


class HeaderLocator:
    """
    Picks the first row whose text contains any header keyword.

    Matching is keyword OR over the lowercased, space-joined cells, so a
    single recognisable label is enough. Falls back to the first row.
    """

    def __init__(self, *, keywords: Sequence[str] = HEADER_KEYWORDS) -> None:
        self._keywords = tuple(keyword.lower() for keyword in keywords if keyword)

    def locate(self, sheet: RawSheet) -> LocatedHeader:
        if sheet is None or len(sheet) < MIN_SHEET_ROWS:
            raise SheetStructureError(
                "Spreadsheet must contain at least a header row and one data row."
            )

        header_index = 0
        for index, row in enumerate(sheet):
            if is_blank_row(row):
                continue
            if self._looks_like_header(row):
                header_index = index
                break
        else:
            logger.info("No header keywords found; using first row as header rows=%d", len(sheet))

        headers = tuple(sheet[header_index] or ())
        data_rows = tuple(
            tuple(row)
            for row in sheet[header_index + 1 :]
            if not is_blank_row(row)
        )
        logger.debug(
            "Header row located index=%d columns=%d data_rows=%d",
            header_index,
            len(headers),
            len(data_rows),
        )
        return LocatedHeader(header_index=header_index, headers=headers, data_rows=data_rows)

    def _looks_like_header(self, row: RawRow) -> bool:
        row_text = " ".join("" if value is None else str(value) for value in row).lower()
        return any(keyword in row_text for keyword in self._keywords)
