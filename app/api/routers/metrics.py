"""
app/api/routers/metrics.py

Metric CRUD endpoints.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, status

from app.api.dependencies import get_metric_store, get_metric_validator
from app.api.errors import api_error
from app.domain.errors import MetricNotFoundError, MetricValidationError
from app.repositories.metric_store import MetricStore
from app.schemas.esg_metric import ApiResponse, MetricResponse
from app.validators.metric_validator import MetricValidator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.get(
    "",
    response_model=ApiResponse[list[MetricResponse]],
    response_model_exclude_none=True,
)
def list_metrics(
    category: str | None = Query(default=None, description="Optional exact-match category filter"),
    store: MetricStore = Depends(get_metric_store),
) -> ApiResponse[list[MetricResponse]]:
    try:
        records = store.list_by_category(category) if category else store.list_all()
    except Exception as exc:  # noqa: BLE001
        logger.exception("Failed to fetch metrics category=%r", category)
        raise api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch metrics") from exc

    return ApiResponse[list[MetricResponse]](
        data=[MetricResponse.model_validate(record) for record in records]
    )


@router.get(
    "/{metric_id}",
    response_model=ApiResponse[MetricResponse],
    response_model_exclude_none=True,
)
def get_metric(
    metric_id: str,
    store: MetricStore = Depends(get_metric_store),
) -> ApiResponse[MetricResponse]:
    try:
        record = store.get(metric_id)
    except MetricNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "Metric not found") from exc

    return ApiResponse[MetricResponse](data=MetricResponse.model_validate(record))


@router.post(
    "",
    response_model=ApiResponse[MetricResponse],
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_metric(
    payload: Any = Body(...),
    store: MetricStore = Depends(get_metric_store),
    validator: MetricValidator = Depends(get_metric_validator),
) -> ApiResponse[MetricResponse]:
    """
    Validate a full metric payload and store it under a new id.
    """

    try:
        fields = validator.validate_create(payload)
    except MetricValidationError as exc:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            details=exc.to_list(),
        ) from exc

    record = store.create(fields)
    return ApiResponse[MetricResponse](data=MetricResponse.model_validate(record))


@router.put(
    "/{metric_id}",
    response_model=ApiResponse[MetricResponse],
    response_model_exclude_none=True,
)
def update_metric(
    metric_id: str,
    payload: Any = Body(...),
    store: MetricStore = Depends(get_metric_store),
    validator: MetricValidator = Depends(get_metric_validator),
) -> ApiResponse[MetricResponse]:
    """
    Apply a partial update; fields that are not supplied stay untouched.
    """

    try:
        patch = validator.validate_update(payload)
        record = store.update(metric_id, patch)
    except MetricValidationError as exc:
        raise api_error(
            status.HTTP_400_BAD_REQUEST,
            "Validation failed",
            details=exc.to_list(),
        ) from exc
    except MetricNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "Metric not found") from exc

    return ApiResponse[MetricResponse](data=MetricResponse.model_validate(record))


@router.delete(
    "/{metric_id}",
    response_model=ApiResponse[None],
    response_model_exclude_none=True,
)
def delete_metric(
    metric_id: str,
    store: MetricStore = Depends(get_metric_store),
) -> ApiResponse[None]:
    try:
        store.remove(metric_id)
    except MetricNotFoundError as exc:
        raise api_error(status.HTTP_404_NOT_FOUND, "Metric not found") from exc

    return ApiResponse[None](message="Metric deleted successfully")
