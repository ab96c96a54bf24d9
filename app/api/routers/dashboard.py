"""
app/api/routers/dashboard.py

Dashboard summary endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_metric_store
from app.api.errors import api_error
from app.repositories.metric_store import MetricStore
from app.schemas.esg_metric import ApiResponse, DashboardResponse
from app.services.dashboard_service import DashboardService, get_dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


@router.get(
    "",
    response_model=ApiResponse[DashboardResponse],
    response_model_exclude_none=True,
)
def get_dashboard(
    store: MetricStore = Depends(get_metric_store),
    service: DashboardService = Depends(get_dashboard_service),
) -> ApiResponse[DashboardResponse]:
    """
    Metrics, per-category counts and trend points, computed fresh per request.
    """

    try:
        dashboard = service.build(store.list_all())
        data = DashboardResponse.model_validate(dashboard)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Dashboard aggregation failed")
        raise api_error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch dashboard data") from exc

    return ApiResponse[DashboardResponse](data=data)
