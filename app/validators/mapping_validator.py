"""
app/validators/mapping_validator.py

Validation for CSV header-to-field mapping resolution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    field: str | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "field": self.field,
            "context": self.context,
        }


class SchemaMappingError(ValueError):
    """
    Raised when a CSV header row cannot be mapped onto metric fields.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
        }


class MappingValidator:
    """
    Checks that every required metric field found a CSV column.
    """

    def __init__(self, *, required_fields: Sequence[str]) -> None:
        self._required_fields = tuple(required_fields)

    def validate(
        self,
        *,
        mapping: Mapping[str, str],
        source_headers: Sequence[str],
    ) -> None:
        """
        Raise SchemaMappingError listing each required field left unmapped.
        """

        missing = [field for field in self._required_fields if field not in mapping]
        if not missing:
            return

        errors = [
            MappingErrorDetail(
                code="required_field_unmapped",
                message="Required field has no matching CSV column.",
                field=field,
                context={"source_headers": list(source_headers)},
            )
            for field in missing
        ]
        raise SchemaMappingError(
            message=f"CSV header validation failed. Missing required columns: {', '.join(sorted(missing))}.",
            errors=errors,
        )
