"""
app/api/routers package marker.
"""

from app.api.routers.csv_export import router as csv_export_router
from app.api.routers.csv_import import router as csv_import_router
from app.api.routers.dashboard import router as dashboard_router
from app.api.routers.metrics import router as metrics_router
from app.api.routers.users import router as users_router

__all__ = [
    "csv_export_router",
    "csv_import_router",
    "dashboard_router",
    "metrics_router",
    "users_router",
]
