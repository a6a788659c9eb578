"""
Model package exports.

Import all SQLAlchemy models here so metadata registration works without
extra imports.
"""

from asset_db.models.it_asset import ITAssetRecord
from asset_db.models.telecom_asset import TelecomAssetRecord

__all__ = [
    "ITAssetRecord",
    "TelecomAssetRecord",
]
