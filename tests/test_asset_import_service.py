from __future__ import annotations

import base64
import random
from datetime import date
from typing import Any

import pytest

from asset_import.config import AssetImportSettings
from asset_import.domain.asset_import import AssetKind
from asset_import.services.asset_import_service import AssetImportService
from asset_import.services.record_synthesizer import REQUIRED_FIELDS, RecordSynthesizer


class FakeRecordStore:
    """In-memory store that can be told to fail on chosen call numbers."""

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def create_record(self, asset_kind: str, record: dict[str, Any]) -> int:
        self.calls.append((asset_kind, dict(record)))
        call_number = len(self.calls)
        if call_number in self.fail_on:
            raise RuntimeError("duplicate sim_number")
        return call_number


@pytest.fixture
def service() -> AssetImportService:
    return AssetImportService(
        settings=AssetImportSettings(),
        synthesizer=RecordSynthesizer(
            today=lambda: date(2024, 2, 1),
            clock_ms=lambda: 1_000,
            rng=random.Random(3),
        ),
    )


def _telecom_sheet(row_count: int) -> list[list[Any]]:
    rows: list[list[Any]] = [["Liste des lignes mobiles"], ["Nom", "Tel", "Operateur"]]
    for index in range(1, row_count + 1):
        rows.append([f"Agent {index}", f"06000000{index:02d}", "inwi"])
    return rows


class TestPreview:
    def test_preview_returns_mappings_and_first_rows_only(self, service: AssetImportService) -> None:
        report = service.preview(_telecom_sheet(7), AssetKind.TELECOM_ASSET)

        assert report.success is True
        assert report.message == "Preview ready: 7 rows will be imported"
        assert report.total_rows == 7
        assert report.created_count == 0
        assert report.errors == ()
        assert [m.mapped_field for m in report.column_mappings] == [
            "sim_owner",
            "sim_number",
            "provider",
        ]
        assert len(report.sample_rows) == 5
        assert report.sample_rows[0]["sim_owner"] == "Agent 1"
        assert report.sample_rows[0]["provider"] == "INWI"

    def test_preview_row_count_follows_settings(self) -> None:
        service = AssetImportService(settings=AssetImportSettings(preview_rows=2))

        report = service.preview(_telecom_sheet(4), AssetKind.TELECOM_ASSET)

        assert len(report.sample_rows) == 2
        assert report.total_rows == 4

    def test_sheet_without_data_row_is_a_structural_failure(self, service: AssetImportService) -> None:
        report = service.preview([["Nom", "Tel"]], AssetKind.TELECOM_ASSET)

        assert report.success is False
        assert report.total_rows == 0
        assert report.column_mappings == ()
        assert report.errors == (report.message,)

    def test_unknown_asset_kind_is_a_caller_error(self, service: AssetImportService) -> None:
        with pytest.raises(ValueError):
            service.preview(_telecom_sheet(1), "furniture")

    def test_plural_asset_kind_alias_is_accepted(self, service: AssetImportService) -> None:
        report = service.preview(_telecom_sheet(1), "telecom_assets")

        assert report.success is True


class TestExecute:
    def test_failing_row_is_isolated(self, service: AssetImportService) -> None:
        store = FakeRecordStore(fail_on={3})

        report = service.execute(_telecom_sheet(5), AssetKind.TELECOM_ASSET, store)

        assert report.success is True
        assert report.total_rows == 5
        assert report.created_count == 4
        assert len(report.errors) == 1
        assert report.errors[0].startswith("Row 3:")
        assert "duplicate sim_number" in report.errors[0]
        assert [record["sim_owner"] for _, record in store.calls] == [
            "Agent 1",
            "Agent 2",
            "Agent 3",
            "Agent 4",
            "Agent 5",
        ]
        assert report.message == "Successfully imported 4 telecom_asset records"

    def test_records_reach_store_in_row_order_with_kind(self, service: AssetImportService) -> None:
        store = FakeRecordStore()

        service.execute(_telecom_sheet(3), AssetKind.TELECOM_ASSET, store)

        assert [kind for kind, _ in store.calls] == [AssetKind.TELECOM_ASSET] * 3
        assert [record["sim_number"] for _, record in store.calls] == [
            "0600000001",
            "0600000002",
            "0600000003",
        ]

    def test_unmapped_sheet_still_yields_complete_records(self, service: AssetImportService) -> None:
        store = FakeRecordStore()
        sheet = [["???", "###"], ["x", "y"], ["z", "w"]]

        report = service.execute(sheet, AssetKind.IT_ASSET, store)

        assert report.column_mappings == ()
        assert report.created_count == 2
        for _, record in store.calls:
            for field_name in REQUIRED_FIELDS[AssetKind.IT_ASSET]:
                assert record.get(field_name) not in (None, ""), field_name

    def test_french_telecom_scenario(self, service: AssetImportService) -> None:
        store = FakeRecordStore()
        sheet = [
            ["Nom", "Tel", "Ville", "Departement"],
            ["Ali Ben", "0612345678", "Casablanca", "IT"],
        ]

        report = service.execute(sheet, AssetKind.TELECOM_ASSET, store)

        assert [m.mapped_field for m in report.column_mappings] == [
            "sim_owner",
            "sim_number",
            "zone",
            "department",
        ]
        assert all(m.confidence >= 0.6 for m in report.column_mappings)
        _, record = store.calls[0]
        assert record["sim_number"] == "0612345678"
        assert record["sim_owner"] == "Ali Ben"
        assert record["zone"] == "Casablanca"
        assert record["department"] == "IT"
        assert record["provider"] == "IAM"
        assert record["date"] == "2024-02-01"

    def test_reported_errors_are_capped(self) -> None:
        service = AssetImportService(settings=AssetImportSettings(max_reported_errors=2))
        store = FakeRecordStore(fail_on={1, 2, 3, 4})

        report = service.execute(_telecom_sheet(4), AssetKind.TELECOM_ASSET, store)

        assert report.created_count == 0
        assert report.errors == (
            "Row 1: duplicate sim_number",
            "Row 2: duplicate sim_number",
        )
        assert len(store.calls) == 4

    def test_sample_rows_are_bounded(self, service: AssetImportService) -> None:
        report = service.execute(_telecom_sheet(8), AssetKind.TELECOM_ASSET, FakeRecordStore())

        assert len(report.sample_rows) == 5
        assert report.to_dict()["created_count"] == 8


class TestUploads:
    def test_execute_upload_reads_csv_bytes(self, service: AssetImportService) -> None:
        store = FakeRecordStore()
        content = "Nom;Tel;Ville\nAli Ben;0612345678;Casablanca\n".encode("utf-8")

        report = service.execute_upload(
            content,
            AssetKind.TELECOM_ASSET,
            store,
            filename="lignes.csv",
        )

        assert report.created_count == 1
        assert store.calls[0][1]["sim_number"] == "0612345678"

    def test_preview_upload_accepts_data_url(self, service: AssetImportService) -> None:
        encoded = base64.b64encode("Nom,Tel\nAli,0611\nSara,0622\n".encode("utf-8")).decode("ascii")

        report = service.preview_upload(
            f"data:text/csv;base64,{encoded}",
            AssetKind.TELECOM_ASSET,
            filename="lines.csv",
        )

        assert report.success is True
        assert report.total_rows == 2

    def test_undecodable_upload_returns_failed_report(self, service: AssetImportService) -> None:
        report = service.preview_upload(b"not a workbook", AssetKind.IT_ASSET, filename="inventory.xlsx")

        assert report.success is False
        assert "Could not read spreadsheet" in report.message

    def test_unsupported_extension_returns_failed_report(self, service: AssetImportService) -> None:
        store = FakeRecordStore()

        report = service.execute_upload(b"%PDF-1.4", AssetKind.IT_ASSET, store, filename="scan.pdf")

        assert report.success is False
        assert store.calls == []
