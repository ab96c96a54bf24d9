"""
Domain-level exceptions shared by the store, validator and API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence


class NotFoundError(LookupError):
    """Base exception for lookups of an id that is not in the store."""

    entity = "Resource"

    def __init__(self, entity_id: str) -> None:
        super().__init__(f"{self.entity} not found: {entity_id}")
        self.entity_id = entity_id


class MetricNotFoundError(NotFoundError):
    """Raised when a metric id is not present in the store."""

    entity = "Metric"


class UserNotFoundError(NotFoundError):
    """Raised when a user id is not present in the store."""

    entity = "User"


@dataclass(frozen=True)
class FieldError:
    """
    One violated field constraint.
    """

    field: str | None
    message: str
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"field": self.field, "message": self.message, "value": self.value}


class MetricValidationError(ValueError):
    """
    Raised when a metric payload violates one or more field constraints.
    """

    def __init__(self, errors: Sequence[FieldError]) -> None:
        self.errors = tuple(errors)
        fields = ", ".join(sorted({error.field or "<payload>" for error in self.errors}))
        super().__init__(f"Metric validation failed for: {fields}")

    def to_list(self) -> list[dict[str, Any]]:
        return [error.to_dict() for error in self.errors]
