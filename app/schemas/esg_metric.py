"""
app/schemas/esg_metric.py

Request validation and response schemas for ESG metric endpoints.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Any, Generic, Literal, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StrictBool, field_validator
from pydantic.alias_generators import to_camel

PERIOD_PATTERN = r"^\d{4}(-Q[1-4])?$"

Category = Literal["environmental", "social", "governance"]
UserRole = Literal["esg", "marketing", "leadership", "admin"]


def parse_iso_datetime(raw: str) -> datetime:
    """
    Parse an ISO-8601 date-time string; naive values are taken as UTC.
    """

    text = raw.strip()
    if "T" not in text and " " not in text:
        raise ValueError("Date-time must include a time component.")
    normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    parsed = datetime.fromisoformat(normalized)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """
    Render a timestamp as UTC ISO-8601 with millisecond precision and a Z suffix.
    """

    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    utc_value = value.astimezone(timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _normalize_date_reported(value: str) -> str:
    try:
        return format_timestamp(parse_iso_datetime(value))
    except ValueError as exc:
        raise ValueError(f"dateReported must be an ISO-8601 date-time ({exc})") from exc


NonEmptyText = Annotated[str, Field(min_length=1)]
MetricValue = Annotated[float, Field(strict=True, ge=0, allow_inf_nan=False)]
Period = Annotated[str, Field(pattern=PERIOD_PATTERN)]
ReportedTimestamp = Annotated[str, AfterValidator(_normalize_date_reported)]


class _MetricSchema(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MetricCreate(_MetricSchema):
    """
    Full metric payload accepted on creation; `id` is assigned by the store.
    """

    category: Category
    metric: NonEmptyText
    value: MetricValue
    unit: NonEmptyText
    period: Period
    source: NonEmptyText
    reported_by: NonEmptyText
    date_reported: ReportedTimestamp
    verified: StrictBool = False
    notes: str = ""


class MetricUpdate(_MetricSchema):
    """
    Partial metric payload; only supplied fields are validated and applied.
    """

    category: Category | None = None
    metric: NonEmptyText | None = None
    value: MetricValue | None = None
    unit: NonEmptyText | None = None
    period: Period | None = None
    source: NonEmptyText | None = None
    reported_by: NonEmptyText | None = None
    date_reported: ReportedTimestamp | None = None
    verified: StrictBool | None = None
    notes: str | None = None

    @field_validator(
        "category",
        "metric",
        "value",
        "unit",
        "period",
        "source",
        "reported_by",
        "date_reported",
        "verified",
        mode="before",
    )
    @classmethod
    def _reject_explicit_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field may not be null")
        return value


class _ResponseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class MetricResponse(_ResponseSchema):
    id: str | None = None
    category: Category
    metric: str
    value: float
    unit: str
    period: str
    source: str
    reported_by: str
    date_reported: str
    verified: bool
    notes: str


class UserResponse(_ResponseSchema):
    id: str
    name: str
    role: UserRole
    department: str


class CategorySummaryResponse(_ResponseSchema):
    environmental: int = Field(..., ge=0)
    social: int = Field(..., ge=0)
    governance: int = Field(..., ge=0)


class TrendPointResponse(_ResponseSchema):
    period: str
    environmental: float
    social: float
    governance: float


class DashboardResponse(_ResponseSchema):
    metrics: list[MetricResponse]
    summary: CategorySummaryResponse
    trends: list[TrendPointResponse]


DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    """
    Response envelope shared by every JSON endpoint.
    """

    success: bool = True
    data: DataT | None = None
    error: str | None = None
    message: str | None = None
    details: Any = None


class HealthResponse(BaseModel):
    status: str
    message: str
