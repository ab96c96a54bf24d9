"""
app/domain/esg_metric.py

Domain models for ESG metric tracking.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

CATEGORY_ENVIRONMENTAL: Final[str] = "environmental"
CATEGORY_SOCIAL: Final[str] = "social"
CATEGORY_GOVERNANCE: Final[str] = "governance"

CATEGORIES: tuple[str, ...] = (
    CATEGORY_ENVIRONMENTAL,
    CATEGORY_SOCIAL,
    CATEGORY_GOVERNANCE,
)

USER_ROLES: tuple[str, ...] = ("esg", "marketing", "leadership", "admin")

# Record fields in canonical order; `id` is owned by the store.
METRIC_FIELDS: tuple[str, ...] = (
    "category",
    "metric",
    "value",
    "unit",
    "period",
    "source",
    "reported_by",
    "date_reported",
    "verified",
    "notes",
)


@dataclass(frozen=True)
class MetricInput:
    """
    Validated metric fields prepared for insertion into the store.
    """

    category: str
    metric: str
    value: float
    unit: str
    period: str
    source: str
    reported_by: str
    date_reported: str
    verified: bool = False
    notes: str = ""


@dataclass(frozen=True)
class MetricRecord:
    """
    One stored ESG measurement.
    """

    id: str
    category: str
    metric: str
    value: float
    unit: str
    period: str
    source: str
    reported_by: str
    date_reported: str
    verified: bool = False
    notes: str = ""

    @classmethod
    def from_input(cls, metric_id: str, fields: MetricInput) -> "MetricRecord":
        return cls(
            id=metric_id,
            category=fields.category,
            metric=fields.metric,
            value=fields.value,
            unit=fields.unit,
            period=fields.period,
            source=fields.source,
            reported_by=fields.reported_by,
            date_reported=fields.date_reported,
            verified=fields.verified,
            notes=fields.notes,
        )


@dataclass(frozen=True)
class User:
    """
    Seeded user profile; the role only drives client-side navigation.
    """

    id: str
    name: str
    role: str
    department: str


@dataclass(frozen=True)
class CategorySummary:
    """
    Number of tracked metrics per category.
    """

    environmental: int = 0
    social: int = 0
    governance: int = 0


@dataclass(frozen=True)
class TrendPoint:
    """
    One chronologically bucketed value per category.
    """

    period: str
    environmental: float
    social: float
    governance: float


@dataclass(frozen=True)
class DashboardData:
    """
    Derived dashboard view over a metric snapshot.
    """

    metrics: list[MetricRecord]
    summary: CategorySummary
    trends: list[TrendPoint]


@dataclass(frozen=True)
class RowValidationError:
    """
    One CSV row validation error detail.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class ImportSummary:
    """
    End-of-run import summary.
    """

    imported: list[MetricRecord | MetricInput] = field(default_factory=list)
    rows_processed: int = 0
    rows_failed: int = 0
    validation_errors: list[RowValidationError] = field(default_factory=list)
    validate_only: bool = False

    @property
    def rows_imported(self) -> int:
        return len(self.imported)
