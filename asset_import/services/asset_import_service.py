"""
asset_import/services/asset_import_service.py

Service layer for spreadsheet asset import orchestration.

Pipeline states, logged at DEBUG as the run advances:

    idle -> located_header -> mapped_columns -> normalized_rows
         -> (preview_ready | persisting) -> done

Structural failures (unreadable upload, sheet too short) end the run with a
failed ImportReport. Persistence failures are isolated per row: each one is
recorded as ``Row <n>: <message>`` and the remaining rows are still written.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Protocol, Sequence

from asset_import.config import AssetImportSettings, get_asset_import_settings
from asset_import.domain.asset_import import (
    CandidateRecord,
    ColumnMapping,
    ImportReport,
    RawRow,
    RawSheet,
    parse_asset_kind,
)
from asset_import.mappers.column_mapper import ColumnMapper
from asset_import.mappers.header_locator import HeaderLocator, SheetStructureError
from asset_import.services.record_synthesizer import RecordSynthesizer
from asset_import.services.sheet_reader import SheetDecodeError, read_sheet
from asset_import.validators.value_normalizer import ValueNormalizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions / collaborators
# ---------------------------------------------------------------------------


class RecordStoreError(RuntimeError):
    """
    Raised by a record store when one candidate record cannot be persisted.
    """

    def __init__(self, message: str, *, asset_kind: str | None = None) -> None:
        super().__init__(message)
        self.asset_kind = asset_kind

    def to_dict(self) -> dict[str, object]:
        return {"message": str(self), "asset_kind": self.asset_kind}


class RecordStore(Protocol):
    """
    Persistence collaborator consumed by the execute path.
    """

    def create_record(self, asset_kind: str, record: CandidateRecord) -> Any:
        ...


class ImportState:
    IDLE = "idle"
    LOCATED_HEADER = "located_header"
    MAPPED_COLUMNS = "mapped_columns"
    NORMALIZED_ROWS = "normalized_rows"
    PREVIEW_READY = "preview_ready"
    PERSISTING = "persisting"
    DONE = "done"


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------


class AssetImportService:
    """
    Coordinates header location, column mapping, normalization, synthesis
    and per-row persistence.
    """

    def __init__(
        self,
        *,
        settings: AssetImportSettings | None = None,
        locator: HeaderLocator | None = None,
        mapper: ColumnMapper | None = None,
        normalizer: ValueNormalizer | None = None,
        synthesizer: RecordSynthesizer | None = None,
    ) -> None:
        self._settings = settings or AssetImportSettings()
        self._locator = locator or HeaderLocator()
        self._mapper = mapper or ColumnMapper(threshold=self._settings.match_threshold)
        self._normalizer = normalizer or ValueNormalizer()
        self._synthesizer = synthesizer or RecordSynthesizer()

    def preview(self, sheet: RawSheet, asset_kind: str) -> ImportReport:
        """
        Map the sheet and synthesize its first few rows without persisting.
        """

        kind = parse_asset_kind(asset_kind)
        self._enter(ImportState.IDLE, kind)
        try:
            mappings, data_rows = self._analyze(sheet, kind)
        except SheetStructureError as exc:
            logger.info("Import preview aborted asset_kind=%s reason=%s", kind, exc)
            return ImportReport.failed(str(exc))

        records = self._build_records(data_rows[: self._settings.preview_rows], mappings, kind)
        self._enter(ImportState.PREVIEW_READY, kind)

        report = ImportReport(
            success=True,
            message=f"Preview ready: {len(data_rows)} rows will be imported",
            total_rows=len(data_rows),
            created_count=0,
            column_mappings=tuple(mappings),
            sample_rows=tuple(records),
        )
        self._enter(ImportState.DONE, kind)
        return report

    def execute(
        self,
        sheet: RawSheet,
        asset_kind: str,
        record_store: RecordStore,
    ) -> ImportReport:
        """
        Import every data row through ``record_store``, one row at a time.

        A failing row is reported and skipped; it never aborts the batch.
        """

        kind = parse_asset_kind(asset_kind)
        self._enter(ImportState.IDLE, kind)
        try:
            mappings, data_rows = self._analyze(sheet, kind)
        except SheetStructureError as exc:
            logger.info("Import aborted asset_kind=%s reason=%s", kind, exc)
            return ImportReport.failed(str(exc))

        records = self._build_records(data_rows, mappings, kind)
        self._enter(ImportState.PERSISTING, kind)

        created_count = 0
        errors: list[str] = []
        for row_number, record in enumerate(records, start=1):
            try:
                record_store.create_record(kind, record)
            except Exception as exc:  # noqa: BLE001
                self._record_error(errors, row_number=row_number, exc=exc, asset_kind=kind)
                continue
            created_count += 1

        logger.info(
            "Import completed asset_kind=%s total_rows=%d created=%d failed=%d",
            kind,
            len(records),
            created_count,
            len(records) - created_count,
        )
        report = ImportReport(
            success=True,
            message=f"Successfully imported {created_count} {kind} records",
            total_rows=len(records),
            created_count=created_count,
            errors=tuple(errors),
            column_mappings=tuple(mappings),
            sample_rows=tuple(records[: self._settings.sample_rows]),
        )
        self._enter(ImportState.DONE, kind)
        return report

    def preview_upload(
        self,
        content: bytes | str,
        asset_kind: str,
        *,
        filename: str | None = None,
    ) -> ImportReport:
        """
        Decode an uploaded workbook (bytes or base64 data URL) and preview it.
        """

        kind = parse_asset_kind(asset_kind)
        try:
            sheet = read_sheet(content, filename=filename)
        except SheetDecodeError as exc:
            logger.info("Upload rejected filename=%r reason=%s", filename, exc)
            return ImportReport.failed(str(exc))
        return self.preview(sheet, kind)

    def execute_upload(
        self,
        content: bytes | str,
        asset_kind: str,
        record_store: RecordStore,
        *,
        filename: str | None = None,
    ) -> ImportReport:
        """
        Decode an uploaded workbook (bytes or base64 data URL) and import it.
        """

        kind = parse_asset_kind(asset_kind)
        try:
            sheet = read_sheet(content, filename=filename)
        except SheetDecodeError as exc:
            logger.info("Upload rejected filename=%r reason=%s", filename, exc)
            return ImportReport.failed(str(exc))
        return self.execute(sheet, kind, record_store)

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    def _analyze(
        self,
        sheet: RawSheet,
        asset_kind: str,
    ) -> tuple[list[ColumnMapping], tuple[RawRow, ...]]:
        located = self._locator.locate(sheet)
        self._enter(ImportState.LOCATED_HEADER, asset_kind)

        mappings = self._mapper.map_headers(
            located.headers,
            asset_kind,
            data_rows=located.data_rows,
        )
        self._enter(ImportState.MAPPED_COLUMNS, asset_kind)
        logger.info(
            "Columns mapped asset_kind=%s headers=%d mapped=%d data_rows=%d",
            asset_kind,
            len(located.headers),
            len(mappings),
            len(located.data_rows),
        )
        return mappings, located.data_rows

    def _build_records(
        self,
        data_rows: Sequence[RawRow],
        mappings: Sequence[ColumnMapping],
        asset_kind: str,
    ) -> list[CandidateRecord]:
        records = [
            self._synthesizer.synthesize(self._normalize_row(row, mappings), asset_kind)
            for row in data_rows
        ]
        self._enter(ImportState.NORMALIZED_ROWS, asset_kind)
        return records

    def _normalize_row(self, row: RawRow, mappings: Sequence[ColumnMapping]) -> CandidateRecord:
        record: CandidateRecord = {}
        for mapping in mappings:
            raw_value = row[mapping.column_index] if mapping.column_index < len(row) else None
            record[mapping.mapped_field] = self._normalizer.normalize_field(
                mapping.mapped_field,
                raw_value,
                mapping.value_type,
            )
        return record

    def _record_error(
        self,
        errors: list[str],
        *,
        row_number: int,
        exc: Exception,
        asset_kind: str,
    ) -> None:
        if self._settings.log_row_errors:
            logger.warning(
                "Row import failed asset_kind=%s row=%d: %s",
                asset_kind,
                row_number,
                exc,
            )
        if len(errors) < self._settings.max_reported_errors:
            errors.append(f"Row {row_number}: {exc}")

    @staticmethod
    def _enter(state: str, asset_kind: str) -> None:
        logger.debug("Import state=%s asset_kind=%s", state, asset_kind)


@lru_cache(maxsize=1)
def get_asset_import_service() -> AssetImportService:
    """
    Return a cached service instance configured from environment variables.
    """

    return AssetImportService(settings=get_asset_import_settings())
