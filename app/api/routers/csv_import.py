"""
app/api/routers/csv_import.py

CSV import endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, UploadFile, status

from app.api.dependencies import get_csv_upload, get_metric_store
from app.api.errors import api_error
from app.domain.esg_metric import ImportSummary
from app.repositories.metric_store import MetricStore
from app.schemas.esg_metric import ApiResponse, MetricResponse
from app.services.csv_import_service import (
    CSVImportService,
    CSVSchemaMappingError,
    CSVStreamError,
    CSVUploadTooLargeError,
    get_csv_import_service,
)

router = APIRouter(prefix="/api/import", tags=["import"])


def _failure_details(summary: ImportSummary) -> dict[str, object]:
    return {
        "rowsProcessed": summary.rows_processed,
        "rowsFailed": summary.rows_failed,
        "errors": [
            {
                "rowNumber": error.row_number,
                "column": error.column,
                "message": error.message,
                "value": error.value,
            }
            for error in summary.validation_errors
        ],
    }


@router.post(
    "/csv",
    response_model=ApiResponse[list[MetricResponse]],
    response_model_exclude_none=True,
)
def import_csv(
    file: UploadFile = Depends(get_csv_upload),
    validate_only: bool = Query(default=False, description="Validate rows without storing them"),
    store: MetricStore = Depends(get_metric_store),
    import_service: CSVImportService = Depends(get_csv_import_service),
) -> ApiResponse[list[MetricResponse]]:
    """
    Import metrics from one CSV file; invalid rows are skipped and reported.
    """

    try:
        summary = import_service.import_csv(
            upload_file=file,
            store=store,
            validate_only=validate_only,
        )
    except CSVUploadTooLargeError as exc:
        raise api_error(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            "Uploaded file is too large",
            details=str(exc),
        ) from exc
    except CSVSchemaMappingError as exc:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Failed to import CSV data",
            details=exc.to_dict(),
        ) from exc
    except CSVStreamError as exc:
        raise api_error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to parse CSV file",
            details=str(exc),
        ) from exc
    finally:
        file.file.close()

    details = _failure_details(summary) if summary.rows_failed else None
    if summary.rows_failed and not summary.imported:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Failed to import CSV data",
            details=details,
        )

    verb = "validated" if summary.validate_only else "imported"
    return ApiResponse[list[MetricResponse]](
        data=[MetricResponse.model_validate(record) for record in summary.imported],
        message=f"Successfully {verb} {summary.rows_imported} metrics",
        details=details,
    )
