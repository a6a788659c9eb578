"""
asset_import/services/record_synthesizer.py

Fills the gaps of a mapped row so every candidate record can be persisted:
asset-kind defaults, device-type inference and generated placeholders for
schema-required fields.
"""

from __future__ import annotations

import logging
import random
import string
import time
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from asset_import.domain.asset_import import AssetKind, CandidateRecord, ITDeviceType
from asset_import.validators.value_normalizer import FALLBACK_PROVIDER


logger = logging.getLogger(__name__)

_BASE36_ALPHABET = string.digits + string.ascii_lowercase
_PLACEHOLDER_SUFFIX_LENGTH = 9

FALLBACK_DEVICE_TYPE = ITDeviceType.DESKTOP

# Substring rules over the lowercased device label, checked in order.
DEVICE_TYPE_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (ITDeviceType.DESKTOP, ("desktop", "ordinateur de bureau")),
    (ITDeviceType.LAPTOP, ("laptop", "portable", "ordinateur portable")),
    (ITDeviceType.PHONE, ("phone", "téléphone", "mobile")),
    (ITDeviceType.TABLET, ("tablet", "tablette")),
    (ITDeviceType.PRINTER, ("printer", "imprimante")),
    (ITDeviceType.MONITOR, ("monitor", "écran", "ecran")),
    (ITDeviceType.ROUTER, ("router", "routeur")),
    (ITDeviceType.SWITCH, ("switch",)),
    (ITDeviceType.SERVER, ("server", "serveur")),
)

KIND_DEFAULTS: dict[str, dict[str, Any]] = {
    AssetKind.IT_ASSET: {
        "status": "active",
        "department": "IT",
        "location": "Office",
    },
    AssetKind.TELECOM_ASSET: {
        "status": "active",
        "department": "IT",
        "zone": "Office",
        "subscription_type": "Monthly",
        "data_plan": "Basic",
    },
}

# Fixed placeholders for required fields; identifier fields are generated.
KIND_PLACEHOLDERS: dict[str, dict[str, Any]] = {
    AssetKind.IT_ASSET: {
        "owner_name": "Unassigned",
        "brand": "Unknown",
        "model": "Unknown",
    },
    AssetKind.TELECOM_ASSET: {
        "sim_owner": "Unassigned",
        "provider": FALLBACK_PROVIDER,
    },
}

GENERATED_IDENTIFIERS: dict[str, tuple[str, str]] = {
    AssetKind.IT_ASSET: ("serial_number", "SN"),
    AssetKind.TELECOM_ASSET: ("sim_number", "SIM"),
}

REQUIRED_FIELDS: dict[str, tuple[str, ...]] = {
    AssetKind.IT_ASSET: ("device_type", "brand", "model", "serial_number", "owner_name", "date"),
    AssetKind.TELECOM_ASSET: ("sim_number", "sim_owner", "provider", "date"),
}


def infer_device_type(label: Any) -> str:
    """
    Classify a free-text device label (French or English) into a device type.
    """

    if not isinstance(label, str):
        return FALLBACK_DEVICE_TYPE
    lowered = label.lower()
    for device_type, keywords in DEVICE_TYPE_RULES:
        if any(keyword in lowered for keyword in keywords):
            return device_type
    return FALLBACK_DEVICE_TYPE


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class RecordSynthesizer:
    """
    Completes candidate records. Never raises for a known asset kind.
    """

    def __init__(
        self,
        *,
        today: Callable[[], date] = date.today,
        clock_ms: Callable[[], int] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self._today = today
        self._clock_ms = clock_ms or (lambda: time.time_ns() // 1_000_000)
        self._rng = rng or random.Random()

    def synthesize(self, record: Mapping[str, Any], asset_kind: str) -> CandidateRecord:
        completed: CandidateRecord = dict(record)

        if asset_kind == AssetKind.IT_ASSET:
            completed["device_type"] = infer_device_type(completed.get("device_type"))

        for field_name, default in KIND_DEFAULTS.get(asset_kind, {}).items():
            if _is_missing(completed.get(field_name)):
                completed[field_name] = default

        identifier = GENERATED_IDENTIFIERS.get(asset_kind)
        if identifier is not None:
            field_name, prefix = identifier
            if _is_missing(completed.get(field_name)):
                completed[field_name] = self._placeholder_identifier(prefix)
                logger.debug(
                    "Generated placeholder identifier field=%s value=%s",
                    field_name,
                    completed[field_name],
                )

        for field_name, placeholder in KIND_PLACEHOLDERS.get(asset_kind, {}).items():
            if _is_missing(completed.get(field_name)):
                completed[field_name] = placeholder

        if _is_missing(completed.get("date")):
            completed["date"] = self._today().isoformat()

        return completed

    def _placeholder_identifier(self, prefix: str) -> str:
        suffix = "".join(
            self._rng.choice(_BASE36_ALPHABET) for _ in range(_PLACEHOLDER_SUFFIX_LENGTH)
        )
        return f"{prefix}-{self._clock_ms()}-{suffix}"
