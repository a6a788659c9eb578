"""
asset_import/mappers/similarity.py

Header normalization and edit-distance similarity used by the column mapper.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Any

from rapidfuzz.distance import Levenshtein

_DISALLOWED_CHARS_RE = re.compile(r"[^a-z0-9\s]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_header(header: Any) -> str:
    """
    Reduce a raw header to its comparison form.

    Lowercases, strips diacritics ("é" -> "e"), drops everything outside
    ``[a-z0-9 ]`` and collapses whitespace. Non-string input yields "".
    """

    if not isinstance(header, str):
        return ""

    decomposed = unicodedata.normalize("NFD", header.lower())
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    cleaned = _DISALLOWED_CHARS_RE.sub("", without_marks)
    return _WHITESPACE_RE.sub(" ", cleaned).strip()


def similarity(left: str, right: str) -> float:
    """
    Levenshtein similarity in [0, 1] between two normalized strings.
    """

    longest = max(len(left), len(right))
    if longest == 0:
        return 1.0
    distance = Levenshtein.distance(left, right)
    return (longest - distance) / longest
