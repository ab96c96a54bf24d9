"""
app/api/routers/csv_export.py

CSV export endpoint.

The export is written to a temporary file that is removed once the
response has been sent, or immediately when writing fails.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import FileResponse
from starlette.background import BackgroundTask

from app.api.dependencies import get_metric_store
from app.api.errors import api_error
from app.repositories.metric_store import MetricStore
from app.services.csv_export_service import (
    EXPORT_FILENAME,
    CSVExportService,
    delete_file_quietly,
    get_csv_export_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/export", tags=["export"])


@router.get("/csv", summary="Download every metric as CSV")
def export_csv(
    store: MetricStore = Depends(get_metric_store),
    service: CSVExportService = Depends(get_csv_export_service),
) -> FileResponse:
    metrics = store.list_all()
    try:
        export_path, rows = service.write_temp_file(metrics)
    except Exception as exc:  # noqa: BLE001
        logger.exception("CSV export failed metrics=%d", len(metrics))
        raise api_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to export CSV",
        ) from exc

    logger.info("CSV export rows=%d", rows)
    return FileResponse(
        path=export_path,
        media_type="text/csv; charset=utf-8",
        filename=EXPORT_FILENAME,
        headers={"X-Row-Count": str(rows)},
        background=BackgroundTask(delete_file_quietly, export_path),
    )
