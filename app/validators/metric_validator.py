"""
app/validators/metric_validator.py

Schema validation for metric payloads on create and partial update.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import ValidationError

from app.domain.errors import FieldError, MetricValidationError
from app.domain.esg_metric import MetricInput
from app.schemas.esg_metric import MetricCreate, MetricUpdate


class MetricValidator:
    """
    Turns untyped payloads into validated metric fields.

    Every violated field is reported, not only the first one.
    """

    def validate_create(self, payload: Any) -> MetricInput:
        """
        Validate a full creation payload.

        Raises MetricValidationError listing every violated field.
        """

        data = self._require_mapping(payload)
        try:
            model = MetricCreate.model_validate(data)
        except ValidationError as exc:
            raise MetricValidationError(_field_errors(exc)) from exc
        return MetricInput(**model.model_dump())

    def validate_update(self, payload: Any) -> dict[str, Any]:
        """
        Validate a partial update payload.

        Returns only the supplied fields keyed by record attribute name.
        """

        data = self._require_mapping(payload)
        try:
            model = MetricUpdate.model_validate(data)
        except ValidationError as exc:
            raise MetricValidationError(_field_errors(exc)) from exc

        patch = model.model_dump(exclude_unset=True)
        if "notes" in patch and patch["notes"] is None:
            patch["notes"] = ""
        return patch

    @staticmethod
    def _require_mapping(payload: Any) -> dict[str, Any]:
        if not isinstance(payload, Mapping):
            raise MetricValidationError(
                [FieldError(field=None, message="Payload must be a JSON object.")]
            )
        return dict(payload)


def _field_errors(exc: ValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        value = None if error.get("type") == "missing" else error.get("input")
        errors.append(
            FieldError(
                field=location or None,
                message=error.get("msg", "Invalid value."),
                value=_json_safe(value),
            )
        )
    return errors


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)
