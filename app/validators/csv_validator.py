"""
app/validators/csv_validator.py

Row-level coercion and validation for CSV metric import.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from app.domain.errors import MetricValidationError
from app.domain.esg_metric import MetricInput, RowValidationError
from app.schemas.esg_metric import format_timestamp, parse_iso_datetime
from app.validators.metric_validator import MetricValidator

TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%d",
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%Y-%m-%d %H:%M:%S",
    "%Y/%m/%d %H:%M:%S",
    "%m/%d/%Y %H:%M:%S",
)


class CSVRowValidator:
    """
    Converts one mapped CSV row (string cells keyed by import key) into
    validated metric fields.
    """

    def __init__(self, metric_validator: MetricValidator | None = None) -> None:
        self._metric_validator = metric_validator or MetricValidator()

    def is_completely_empty_row(self, row: Mapping[Any, Any]) -> bool:
        """
        Return True when all values in the row are empty or whitespace.
        """

        return all(self._is_blank(value) for value in row.values())

    def validate_mapped_row(
        self,
        *,
        mapped_row: Mapping[str, str | None],
        row_number: int,
    ) -> tuple[MetricInput | None, list[RowValidationError]]:
        """
        Coerce and validate one mapped row.

        Cells are coerced first (numbers, booleans, timestamps); the result
        then goes through the same validation as an API create.
        """

        payload = self.coerce_row(mapped_row)
        try:
            return self._metric_validator.validate_create(payload), []
        except MetricValidationError as exc:
            return None, [
                RowValidationError(
                    row_number=row_number,
                    column=error.field,
                    message=error.message,
                    value=self._cell_value(mapped_row, error.field, error.value),
                )
                for error in exc.errors
            ]

    def _cell_value(self, mapped_row: Mapping[str, str | None], column: str | None, fallback: Any) -> str | None:
        # Report the cell as written, not its coerced form.
        if column is not None and column in mapped_row:
            return mapped_row[column]
        return self._stringify_value(fallback)

    def coerce_row(self, mapped_row: Mapping[str, str | None]) -> dict[str, Any]:
        payload: dict[str, Any] = {}

        for key in ("metric", "unit", "period", "source", "reportedBy"):
            value = mapped_row.get(key)
            if value is not None:
                payload[key] = value

        category = mapped_row.get("category")
        if category is not None:
            payload["category"] = category.strip().lower()

        value = self._parse_value(mapped_row.get("value"))
        if value is not None:
            payload["value"] = value

        date_reported = self._parse_timestamp(mapped_row.get("dateReported"))
        if date_reported is not None:
            payload["dateReported"] = date_reported

        payload["verified"] = self._parse_verified(mapped_row.get("verified"))
        payload["notes"] = mapped_row.get("notes") or ""
        return payload

    def _parse_value(self, value: str | None) -> float | str | None:
        if self._is_blank(value):
            return None
        raw_value = str(value).strip()
        try:
            return float(raw_value)
        except ValueError:
            # Left as text so validation reports it as non-numeric.
            return raw_value

    def _parse_timestamp(self, value: str | None) -> str | None:
        if self._is_blank(value):
            return None

        raw = str(value).strip()
        try:
            return format_timestamp(parse_iso_datetime(raw))
        except ValueError:
            pass

        for fmt in TIMESTAMP_FORMATS:
            try:
                parsed = datetime.strptime(raw, fmt)
                return format_timestamp(parsed.replace(tzinfo=timezone.utc))
            except ValueError:
                continue

        return raw

    @staticmethod
    def _parse_verified(value: str | None) -> bool:
        return value is not None and value.strip() == "true"

    @staticmethod
    def _is_blank(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, (list, tuple)):
            return all(str(item).strip() == "" for item in value)
        return str(value).strip() == ""

    @staticmethod
    def _stringify_value(value: Any) -> str | None:
        if value is None:
            return None
        return str(value)
