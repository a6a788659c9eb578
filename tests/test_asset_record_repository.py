from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest
from sqlalchemy import CheckConstraint, create_engine, func, select
from sqlalchemy.orm import Session

from asset_import.domain.asset_import import ACCEPTED_PROVIDERS, AssetKind
from asset_import.repositories.asset_record_repository import AssetRecordRepository
from asset_import.services.asset_import_service import AssetImportService, RecordStoreError
from asset_db.base import init_schema
from asset_db.models import ITAssetRecord, TelecomAssetRecord


@pytest.fixture
def session() -> Iterator[Session]:
    engine = create_engine("sqlite://")
    init_schema(engine)
    with Session(engine) as db:
        yield db
    engine.dispose()


def _it_record(serial_number: str) -> dict[str, object]:
    return {
        "device_type": "laptop",
        "brand": "Dell",
        "model": "Latitude 5440",
        "serial_number": serial_number,
        "owner_name": "Ali Ben",
        "date": "2024-01-05",
        "ram_gb": 16.0,
        "has_mouse": True,
        "has_screen": None,
        "status": "active",
        "zone": "not an IT column",
    }


def test_creates_it_asset_with_typed_columns(session: Session) -> None:
    repository = AssetRecordRepository(session)

    record_id = repository.create_record(AssetKind.IT_ASSET, _it_record("SN-001"))

    stored = session.get(ITAssetRecord, record_id)
    assert stored is not None
    assert stored.serial_number == "SN-001"
    assert stored.date == date(2024, 1, 5)
    assert stored.ram_gb == 16.0
    assert stored.has_mouse is True
    assert stored.has_screen is False


def test_duplicate_serial_number_raises_and_session_stays_usable(session: Session) -> None:
    repository = AssetRecordRepository(session)
    repository.create_record(AssetKind.IT_ASSET, _it_record("SN-001"))

    with pytest.raises(RecordStoreError) as exc_info:
        repository.create_record(AssetKind.IT_ASSET, _it_record("SN-001"))

    assert exc_info.value.asset_kind == AssetKind.IT_ASSET
    repository.create_record(AssetKind.IT_ASSET, _it_record("SN-002"))
    assert session.scalar(select(func.count()).select_from(ITAssetRecord)) == 2


def test_provider_outside_accepted_set_is_rejected(session: Session) -> None:
    repository = AssetRecordRepository(session)

    with pytest.raises(RecordStoreError):
        repository.create_record(
            AssetKind.TELECOM_ASSET,
            {
                "sim_number": "0612345678",
                "sim_owner": "Ali Ben",
                "provider": "VODAFONE",
                "date": "2024-02-01",
            },
        )


def test_invalid_date_value_raises_record_store_error(session: Session) -> None:
    repository = AssetRecordRepository(session)
    record = _it_record("SN-009")
    record["date"] = "yesterday"

    with pytest.raises(RecordStoreError):
        repository.create_record(AssetKind.IT_ASSET, record)


def test_execute_persists_rows_and_isolates_duplicates(session: Session) -> None:
    sheet = [
        ["Inventaire", None, None, None, None],
        ["Type", "Marque", "Modele", "Numero Serie", "Utilisateur"],
        ["Ordinateur portable", "Dell", "Latitude", "ABC1", "Ali"],
        ["Imprimante", "HP", "LaserJet", "ABC1", "Sara"],
        ["Serveur", "Lenovo", "ThinkSystem", "ABC2", "Omar"],
    ]

    report = AssetImportService().execute(
        sheet,
        AssetKind.IT_ASSET,
        AssetRecordRepository(session),
    )

    assert report.total_rows == 3
    assert report.created_count == 2
    assert len(report.errors) == 1
    assert report.errors[0].startswith("Row 2:")

    stored = session.scalars(select(ITAssetRecord).order_by(ITAssetRecord.id)).all()
    assert [(row.device_type, row.serial_number) for row in stored] == [
        ("laptop", "ABC1"),
        ("server", "ABC2"),
    ]
    assert stored[0].assigned_to == "Ali"
    assert stored[0].owner_name == "Unassigned"
    assert stored[0].location == "Office"


def test_execute_telecom_rows(session: Session) -> None:
    sheet = [
        ["Nom", "Tel", "Ville", "Departement"],
        ["Ali Ben", "0612345678", "Casablanca", "IT"],
    ]

    report = AssetImportService().execute(
        sheet,
        AssetKind.TELECOM_ASSET,
        AssetRecordRepository(session),
    )

    assert report.created_count == 1
    stored = session.scalars(select(TelecomAssetRecord)).one()
    assert stored.sim_number == "0612345678"
    assert stored.provider == "IAM"
    assert stored.zone == "Casablanca"


def test_provider_constraint_lists_every_accepted_provider() -> None:
    constraints = [
        str(constraint.sqltext)
        for constraint in TelecomAssetRecord.__table__.constraints
        if isinstance(constraint, CheckConstraint)
    ]

    assert constraints == [
        "provider IN (" + ", ".join(f"'{code}'" for code in ACCEPTED_PROVIDERS) + ")"
    ]
