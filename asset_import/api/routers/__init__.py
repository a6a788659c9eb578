"""
asset_import/api/routers package marker.
"""

from asset_import.api.routers.asset_import import router as asset_import_router

__all__ = [
    "asset_import_router",
]
