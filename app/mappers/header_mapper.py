"""
app/mappers/header_mapper.py

Canonical column table and CSV header resolution for metric import/export.

The same table drives both directions: export writes ``title`` headers, and
import accepts either the field ``key`` or the ``title`` (matched case- and
punctuation-insensitively), so ``Reported By`` and ``reportedBy`` resolve to
the same field.
"""

from __future__ import annotations

from dataclasses import dataclass
from difflib import SequenceMatcher
from typing import Mapping, Sequence

from app.validators.mapping_validator import MappingErrorDetail, MappingValidator, SchemaMappingError


@dataclass(frozen=True)
class MetricColumn:
    """
    One row of the canonical column table.
    """

    attribute: str
    key: str
    title: str
    required: bool = False


METRIC_COLUMNS: tuple[MetricColumn, ...] = (
    MetricColumn("id", "id", "ID"),
    MetricColumn("category", "category", "Category", required=True),
    MetricColumn("metric", "metric", "Metric", required=True),
    MetricColumn("value", "value", "Value", required=True),
    MetricColumn("unit", "unit", "Unit", required=True),
    MetricColumn("period", "period", "Period", required=True),
    MetricColumn("source", "source", "Source", required=True),
    MetricColumn("reported_by", "reportedBy", "Reported By", required=True),
    MetricColumn("date_reported", "dateReported", "Date Reported", required=True),
    MetricColumn("verified", "verified", "Verified"),
    MetricColumn("notes", "notes", "Notes"),
)

# The store assigns ids, so an imported ID column is recognised and skipped.
IGNORED_IMPORT_KEYS: frozenset[str] = frozenset({"id"})

IMPORT_KEYS: tuple[str, ...] = tuple(
    column.key for column in METRIC_COLUMNS if column.key not in IGNORED_IMPORT_KEYS
)
REQUIRED_IMPORT_KEYS: tuple[str, ...] = tuple(column.key for column in METRIC_COLUMNS if column.required)

DEFAULT_COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "category": ("esg_category", "pillar"),
    "metric": ("metric_name", "indicator", "kpi"),
    "value": ("amount", "metric_value", "quantity"),
    "unit": ("units", "unit_of_measure"),
    "period": ("reporting_period", "fiscal_period"),
    "source": ("data_source", "provenance"),
    "reportedBy": ("reporter", "submitted_by"),
    "dateReported": ("reported_at", "date", "reported_on"),
    "verified": ("is_verified",),
    "notes": ("note", "comments", "remarks"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class MappingResolution:
    """
    Final resolved mapping metadata.
    """

    key_to_source: dict[str, str]
    source_headers: tuple[str, ...]
    match_strategies: dict[str, str]
    ignored_headers: tuple[str, ...] = ()


class HeaderMapper:
    """
    Resolves uploaded CSV headers onto metric import keys.
    """

    def __init__(
        self,
        *,
        aliases: Mapping[str, Sequence[str]] | None = None,
        validator: MappingValidator | None = None,
        fuzzy_threshold: float = 0.84,
    ) -> None:
        self._aliases: dict[str, tuple[str, ...]] = {
            key: tuple(values)
            for key, values in (aliases or DEFAULT_COLUMN_ALIASES).items()
        }
        self._titles: dict[str, str] = {column.key: column.title for column in METRIC_COLUMNS}
        self._validator = validator or MappingValidator(required_fields=REQUIRED_IMPORT_KEYS)
        self._fuzzy_threshold = max(0.0, min(1.0, fuzzy_threshold))

    def resolve_mapping(self, headers: Sequence[str | None]) -> MappingResolution:
        """
        Resolve the import-key-to-source-column mapping for a header row.
        """

        source_headers = tuple(header for header in headers if header and header.strip())
        if not source_headers:
            raise SchemaMappingError(
                message="CSV headers are empty; cannot resolve column mapping.",
                errors=[
                    MappingErrorDetail(
                        code="empty_headers",
                        message="No CSV headers were provided.",
                    )
                ],
            )

        normalized_header_lookup: dict[str, str] = {}
        for header in source_headers:
            normalized = normalize_header(header)
            if normalized and normalized not in normalized_header_lookup:
                normalized_header_lookup[normalized] = header

        ignored = tuple(
            header
            for header in source_headers
            if normalize_header(header) in {normalize_header(key) for key in IGNORED_IMPORT_KEYS}
        )
        used_headers: set[str] = set(ignored)

        resolved: dict[str, str] = {}
        strategies: dict[str, str] = {}

        # Exact and alias matches take every header they can before fuzzy matching runs.
        for key in IMPORT_KEYS:
            exact = self._find_exact_or_alias_match(
                key=key,
                normalized_header_lookup=normalized_header_lookup,
            )
            if exact is not None and exact not in used_headers:
                resolved[key] = exact
                strategies[key] = "exact_or_alias"
                used_headers.add(exact)

        for key in IMPORT_KEYS:
            if key in resolved:
                continue
            fuzzy_match = self._find_best_fuzzy_match(
                key=key,
                normalized_header_lookup=normalized_header_lookup,
                used_headers=used_headers,
            )
            if fuzzy_match is not None:
                resolved[key] = fuzzy_match
                strategies[key] = "fuzzy"
                used_headers.add(fuzzy_match)

        self._validator.validate(mapping=resolved, source_headers=source_headers)

        return MappingResolution(
            key_to_source=resolved,
            source_headers=source_headers,
            match_strategies=strategies,
            ignored_headers=ignored,
        )

    @staticmethod
    def map_row(
        *,
        raw_row: Mapping[str | None, str | list[str] | None],
        mapping: MappingResolution,
    ) -> dict[str, str | None]:
        """
        Map one source CSV row into raw values keyed by import key.
        """

        mapped: dict[str, str | None] = {}
        for key, source_column in mapping.key_to_source.items():
            value = raw_row.get(source_column)
            mapped[key] = value if isinstance(value, str) or value is None else None
        return mapped

    def _find_exact_or_alias_match(
        self,
        *,
        key: str,
        normalized_header_lookup: Mapping[str, str],
    ) -> str | None:
        candidates = (key, self._titles.get(key, key), *self._aliases.get(key, ()))
        for candidate in candidates:
            match = normalized_header_lookup.get(normalize_header(candidate))
            if match:
                return match
        return None

    def _find_best_fuzzy_match(
        self,
        *,
        key: str,
        normalized_header_lookup: Mapping[str, str],
        used_headers: set[str],
    ) -> str | None:
        alias_candidates = [key, self._titles.get(key, key), *self._aliases.get(key, ())]
        normalized_candidates = [normalize_header(item) for item in alias_candidates if normalize_header(item)]

        best_header: str | None = None
        best_score = 0.0
        for header_norm, header_raw in normalized_header_lookup.items():
            if header_raw in used_headers:
                continue
            for candidate in normalized_candidates:
                score = SequenceMatcher(None, header_norm, candidate).ratio()
                if score > best_score:
                    best_score = score
                    best_header = header_raw

        if best_header is not None and best_score >= self._fuzzy_threshold:
            return best_header
        return None
