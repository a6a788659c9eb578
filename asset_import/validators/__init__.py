"""
asset_import/validators package marker.
"""

from asset_import.validators.value_normalizer import (
    FALLBACK_PROVIDER,
    TRUTHY_TOKENS,
    ValueNormalizer,
    canonicalize_provider,
)

__all__ = [
    "FALLBACK_PROVIDER",
    "TRUTHY_TOKENS",
    "ValueNormalizer",
    "canonicalize_provider",
]
