"""
asset_import/validators/value_normalizer.py

Cell-level type coercion for mapped spreadsheet columns.

Coercion never raises: a value that cannot be read as its field's type
becomes None and is later filled in by record synthesis.
"""

from __future__ import annotations

import re
from datetime import date, datetime
from typing import Any, Callable, Mapping

from asset_import.domain.asset_import import TelecomProvider, ValueType

DATE_FORMATS: tuple[str, ...] = (
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%Y",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%d/%m/%y",
)

# Closed-world: anything not listed here, garbage included, reads as False.
TRUTHY_TOKENS = frozenset({"true", "1", "yes", "oui", "o"})

FALLBACK_PROVIDER = TelecomProvider.IAM

# Checked in order; first rule with a matching token wins.
PROVIDER_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (TelecomProvider.IAM, ("IAM", "MAROC", "TELECOM", "COMMERCIAL")),
    (TelecomProvider.INWI, ("INWI", "WANA")),
    (TelecomProvider.ORANGE, ("ORANGE", "MEDITEL")),
)

_NUMBER_NOISE_RE = re.compile(r"[^\d.\-]")
_LEADING_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


def canonicalize_provider(value: Any) -> str:
    """
    Map a free-text operator name onto one of ACCEPTED_PROVIDERS.
    """

    if value is None:
        return FALLBACK_PROVIDER
    provider = str(value).strip().upper()
    if not provider:
        return FALLBACK_PROVIDER
    for code, tokens in PROVIDER_RULES:
        if any(token in provider for token in tokens):
            return code
    return FALLBACK_PROVIDER


FIELD_CANONICALIZERS: dict[str, Callable[[Any], Any]] = {
    "provider": canonicalize_provider,
}


class ValueNormalizer:
    """
    Converts raw cell values into the semantic type of their mapped field.
    """

    def __init__(
        self,
        *,
        canonicalizers: Mapping[str, Callable[[Any], Any]] | None = None,
    ) -> None:
        self._canonicalizers = dict(
            FIELD_CANONICALIZERS if canonicalizers is None else canonicalizers
        )

    def normalize_field(self, field_name: str, value: Any, value_type: str) -> Any:
        """
        Coerce ``value`` to ``value_type`` and apply the field's enum rule, if any.
        """

        normalized = self.normalize(value, value_type)
        canonicalizer = self._canonicalizers.get(field_name)
        if canonicalizer is not None:
            return canonicalizer(normalized)
        return normalized

    def normalize(self, value: Any, value_type: str) -> Any:
        if value is None:
            return None
        if value_type == ValueType.NUMBER:
            return self._parse_number(value)
        if value_type == ValueType.DATE:
            return self._parse_date(value)
        if value_type == ValueType.BOOLEAN:
            return self._parse_boolean(value)
        return self._stringify(value).strip()

    def _parse_number(self, value: Any) -> float | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return float(value)

        digits = _NUMBER_NOISE_RE.sub("", str(value))
        match = _LEADING_NUMBER_RE.match(digits)
        if match is None:
            return None
        try:
            return float(match.group(0))
        except ValueError:
            return None

    def _parse_date(self, value: Any) -> str | None:
        if isinstance(value, datetime):
            return value.date().isoformat()
        if isinstance(value, date):
            return value.isoformat()

        raw = str(value).strip()
        if not raw:
            return None

        normalized = raw[:-1] + "+00:00" if raw.endswith("Z") else raw
        try:
            return datetime.fromisoformat(normalized).date().isoformat()
        except ValueError:
            pass

        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(raw, fmt).date().isoformat()
            except ValueError:
                continue
        return None

    def _parse_boolean(self, value: Any) -> bool:
        return self._stringify(value).strip().lower() in TRUTHY_TOKENS

    @staticmethod
    def _stringify(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
