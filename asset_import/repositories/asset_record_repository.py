"""
asset_import/repositories/asset_record_repository.py

Persistence layer for imported IT and telecom asset records.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping

from sqlalchemy import Date, inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from asset_import.domain.asset_import import AssetKind, parse_asset_kind
from asset_import.services.asset_import_service import RecordStoreError
from asset_db.base import Base
from asset_db.models.it_asset import ITAssetRecord
from asset_db.models.telecom_asset import TelecomAssetRecord

logger = logging.getLogger(__name__)

_MODEL_BY_KIND: dict[str, type[Base]] = {
    AssetKind.IT_ASSET: ITAssetRecord,
    AssetKind.TELECOM_ASSET: TelecomAssetRecord,
}

# Server-managed columns never taken from an imported row.
_RESERVED_COLUMNS = frozenset({"id", "created_at", "updated_at"})


class AssetRecordRepository:
    """
    Record store writing one ORM row per candidate record.

    Each record is committed on its own so that a rejected row (duplicate
    identifier, provider outside the accepted set) leaves earlier rows intact.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def create_record(self, asset_kind: str, record: Mapping[str, Any]) -> int:
        """
        Persist one candidate record and return its primary key.
        """

        kind = parse_asset_kind(asset_kind)
        model = _MODEL_BY_KIND[kind]
        payload = self._to_payload(model, record)

        instance = model(**payload)
        try:
            self._session.add(instance)
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            detail = getattr(exc, "orig", None) or exc
            logger.debug("Asset record rejected asset_kind=%s error=%s", kind, detail)
            raise RecordStoreError(
                f"Could not store {kind} record: {detail}",
                asset_kind=kind,
            ) from exc

        return instance.id

    def _to_payload(self, model: type[Base], record: Mapping[str, Any]) -> dict[str, Any]:
        columns = inspect(model).columns
        payload: dict[str, Any] = {}
        for name, value in record.items():
            if name in _RESERVED_COLUMNS or name not in columns or value is None:
                continue
            if isinstance(columns[name].type, Date):
                value = _to_date(value)
            payload[name] = value
        return payload


def _to_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError as exc:
        raise RecordStoreError(f"Invalid ISO date value: {value!r}") from exc
