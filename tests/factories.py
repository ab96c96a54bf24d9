"""
Payload and row builders shared by the test modules.
"""

from __future__ import annotations

from typing import Any

from app.domain.esg_metric import MetricInput

CSV_HEADER = "category,metric,value,unit,period,source,reportedBy,dateReported,verified,notes"


def metric_payload(**overrides: Any) -> dict[str, Any]:
    """A valid JSON creation payload."""
    payload: dict[str, Any] = {
        "category": "environmental",
        "metric": "CO2 Emissions",
        "value": 120.5,
        "unit": "tCO2e",
        "period": "2024-Q3",
        "source": "Energy Meter",
        "reportedBy": "Carlos Silva",
        "dateReported": "2024-07-01T10:00:00.000Z",
        "verified": True,
        "notes": "scope 1",
    }
    payload.update(overrides)
    return payload


def metric_input(**overrides: Any) -> MetricInput:
    fields: dict[str, Any] = {
        "category": "environmental",
        "metric": "CO2 Emissions",
        "value": 120.5,
        "unit": "tCO2e",
        "period": "2024-Q3",
        "source": "Energy Meter",
        "reported_by": "Carlos Silva",
        "date_reported": "2024-07-01T10:00:00.000Z",
        "verified": False,
        "notes": "",
    }
    fields.update(overrides)
    return MetricInput(**fields)


def csv_row(
    *,
    category: str = "environmental",
    metric: str = "CO2",
    value: str = "10",
    unit: str = "t",
    period: str = "2024",
    source: str = "S",
    reported_by: str = "R",
    date_reported: str = "2024-01-01T00:00:00.000Z",
    verified: str = "true",
    notes: str = "",
) -> str:
    return ",".join(
        [category, metric, value, unit, period, source, reported_by, date_reported, verified, notes]
    )


def csv_document(*rows: str, header: str = CSV_HEADER) -> str:
    return "\n".join([header, *rows]) + "\n"
