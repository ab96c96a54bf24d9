"""
app/services/dashboard_service.py

Dashboard aggregation over a metric snapshot.

Summary values are record counts per category ("how many indicators are
tracked"), never sums of ``value``. They are recomputed from the snapshot
on every call.

Trend points are a fixed placeholder series. They are not derived from the
stored metrics.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from functools import lru_cache

from app.domain.esg_metric import (
    CATEGORY_ENVIRONMENTAL,
    CATEGORY_GOVERNANCE,
    CATEGORY_SOCIAL,
    CategorySummary,
    DashboardData,
    MetricRecord,
    TrendPoint,
)

PLACEHOLDER_TRENDS: tuple[TrendPoint, ...] = (
    TrendPoint(period="2024-Q1", environmental=10, social=20, governance=5),
    TrendPoint(period="2023-Q4", environmental=8, social=18, governance=4),
)


class DashboardService:
    """
    Builds the dashboard view. Stateless; safe to share.
    """

    def __init__(self, *, trends: Sequence[TrendPoint] = PLACEHOLDER_TRENDS) -> None:
        self._trends = tuple(trends)

    def build(self, metrics: Sequence[MetricRecord]) -> DashboardData:
        snapshot = list(metrics)
        return DashboardData(
            metrics=snapshot,
            summary=self.summarize(snapshot),
            trends=list(self._trends),
        )

    @staticmethod
    def summarize(metrics: Sequence[MetricRecord]) -> CategorySummary:
        counts = Counter(record.category for record in metrics)
        return CategorySummary(
            environmental=counts[CATEGORY_ENVIRONMENTAL],
            social=counts[CATEGORY_SOCIAL],
            governance=counts[CATEGORY_GOVERNANCE],
        )


@lru_cache(maxsize=1)
def get_dashboard_service() -> DashboardService:
    return DashboardService()
