"""
app/schemas package marker.
"""

from app.schemas.esg_metric import (
    ApiResponse,
    DashboardResponse,
    HealthResponse,
    MetricCreate,
    MetricResponse,
    MetricUpdate,
    UserResponse,
)

__all__ = [
    "ApiResponse",
    "DashboardResponse",
    "HealthResponse",
    "MetricCreate",
    "MetricResponse",
    "MetricUpdate",
    "UserResponse",
]
