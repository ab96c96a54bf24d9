"""
app/domain package marker.
"""

from app.domain.errors import (
    FieldError,
    MetricNotFoundError,
    MetricValidationError,
    NotFoundError,
    UserNotFoundError,
)
from app.domain.esg_metric import (
    CATEGORIES,
    USER_ROLES,
    CategorySummary,
    DashboardData,
    ImportSummary,
    MetricInput,
    MetricRecord,
    RowValidationError,
    TrendPoint,
    User,
)

__all__ = [
    "CATEGORIES",
    "USER_ROLES",
    "CategorySummary",
    "DashboardData",
    "FieldError",
    "ImportSummary",
    "MetricInput",
    "MetricNotFoundError",
    "MetricRecord",
    "MetricValidationError",
    "NotFoundError",
    "RowValidationError",
    "TrendPoint",
    "User",
    "UserNotFoundError",
]
