"""
app/services package marker.
"""

from app.services.csv_export_service import CSVExportService, get_csv_export_service
from app.services.csv_import_service import (
    CSVImportError,
    CSVImportService,
    CSVSchemaMappingError,
    CSVStreamError,
    CSVUploadTooLargeError,
    get_csv_import_service,
)
from app.services.dashboard_service import DashboardService, get_dashboard_service

__all__ = [
    "CSVExportService",
    "CSVImportError",
    "CSVImportService",
    "CSVSchemaMappingError",
    "CSVStreamError",
    "CSVUploadTooLargeError",
    "DashboardService",
    "get_csv_export_service",
    "get_csv_import_service",
    "get_dashboard_service",
]
