"""
asset_import/mappers/column_mapper.py

Maps free-text spreadsheet headers onto canonical asset fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Sequence

from asset_import.domain.asset_import import ColumnMapping, RawRow
from asset_import.mappers.field_catalog import DEFAULT_FIELD_CATALOG, FieldCatalog, FieldSpec
from asset_import.mappers.similarity import normalize_header, similarity

logger = logging.getLogger(__name__)

DEFAULT_MATCH_THRESHOLD = 0.6
_SAMPLE_VALUES_PER_COLUMN = 3


@dataclass(frozen=True)
class _FieldMatch:
    spec: FieldSpec
    confidence: float
    exact: bool


class ColumnMapper:
    """
    Assigns at most one canonical field to each header, left to right.

    A field, once claimed by a header, is not offered to later headers.
    """

    def __init__(
        self,
        *,
        catalog: FieldCatalog | None = None,
        threshold: float = DEFAULT_MATCH_THRESHOLD,
    ) -> None:
        self._catalog = DEFAULT_FIELD_CATALOG if catalog is None else catalog
        self._threshold = max(0.0, min(1.0, threshold))

    @property
    def catalog(self) -> FieldCatalog:
        return self._catalog

    def map_headers(
        self,
        headers: Sequence[Any],
        asset_kind: str,
        *,
        data_rows: Sequence[RawRow] = (),
    ) -> list[ColumnMapping]:
        """
        Resolve the header row of one sheet into column mappings.

        Headers with no acceptable match are left out of the result.
        ``data_rows`` only feeds the ``sample_values`` of each mapping.
        """

        eligible = self._catalog.eligible_fields(asset_kind)
        claimed: set[str] = set()
        mappings: list[ColumnMapping] = []

        for column_index, header in enumerate(headers):
            normalized = normalize_header(header)
            if not normalized:
                continue

            match = self._best_match(
                normalized_header=normalized,
                candidates=[spec for spec in eligible if spec.name not in claimed],
            )
            if match is None:
                logger.debug("Header left unmapped header=%r normalized=%r", header, normalized)
                continue

            claimed.add(match.spec.name)
            mappings.append(
                ColumnMapping(
                    original_header=str(header),
                    mapped_field=match.spec.name,
                    confidence=match.confidence,
                    value_type=match.spec.value_type,
                    column_index=column_index,
                    sample_values=_sample_column(data_rows, column_index),
                )
            )
            logger.debug(
                "Header mapped header=%r field=%s confidence=%.3f exact=%s",
                header,
                match.spec.name,
                match.confidence,
                match.exact,
            )

        return mappings

    def _best_match(
        self,
        *,
        normalized_header: str,
        candidates: Sequence[FieldSpec],
    ) -> _FieldMatch | None:
        best: _FieldMatch | None = None
        for spec in candidates:
            match = self._score_field(spec, normalized_header)
            if match is None:
                continue
            # Strict comparison keeps the earlier catalog entry on ties.
            if best is None or match.confidence > best.confidence:
                best = match
        return best

    def _score_field(self, spec: FieldSpec, normalized_header: str) -> _FieldMatch | None:
        synonyms = self._catalog.normalized_synonyms(spec.name)
        if not synonyms:
            return None

        exact = normalized_header in synonyms
        best_similarity = 1.0 if exact else max(
            similarity(normalized_header, synonym) for synonym in synonyms
        )
        if best_similarity <= self._threshold:
            return None
        if spec.rejects(normalized_header):
            return None
        if (
            not exact
            and spec.min_fuzzy_confidence is not None
            and best_similarity < spec.min_fuzzy_confidence
        ):
            return None

        return _FieldMatch(spec=spec, confidence=1.0 if exact else best_similarity, exact=exact)


def _sample_column(data_rows: Sequence[RawRow], column_index: int) -> tuple[Any, ...]:
    samples: list[Any] = []
    for row in data_rows:
        if column_index >= len(row):
            continue
        value = row[column_index]
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        samples.append(value)
        if len(samples) >= _SAMPLE_VALUES_PER_COLUMN:
            break
    return tuple(samples)
