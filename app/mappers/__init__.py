"""
app/mappers package marker.
"""

from app.mappers.header_mapper import (
    IMPORT_KEYS,
    METRIC_COLUMNS,
    REQUIRED_IMPORT_KEYS,
    HeaderMapper,
    MappingResolution,
    MetricColumn,
    normalize_header,
)

__all__ = [
    "IMPORT_KEYS",
    "METRIC_COLUMNS",
    "REQUIRED_IMPORT_KEYS",
    "HeaderMapper",
    "MappingResolution",
    "MetricColumn",
    "normalize_header",
]
