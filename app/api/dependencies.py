"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation and app state.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import File, Request, UploadFile, status

from app.api.errors import api_error
from app.repositories.metric_store import MetricStore
from app.validators.metric_validator import MetricValidator

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_metric_store(request: Request) -> MetricStore:
    """
    Return the store owned by the running application.
    """

    return request.app.state.metric_store


@lru_cache(maxsize=1)
def get_metric_validator() -> MetricValidator:
    return MetricValidator()


def get_csv_upload(file: UploadFile | None = File(default=None)) -> UploadFile:
    """
    Require an uploaded file that is a CSV by extension or MIME type.
    """

    if file is None:
        raise api_error(status.HTTP_400_BAD_REQUEST, "No file uploaded")

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").split(";")[0].strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        file.file.close()
        raise api_error(status.HTTP_400_BAD_REQUEST, "Only CSV files are allowed")

    return file
