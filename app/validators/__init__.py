"""
app/validators package marker.
"""

from app.validators.mapping_validator import MappingErrorDetail, MappingValidator, SchemaMappingError
from app.validators.metric_validator import MetricValidator

__all__ = [
    "MappingErrorDetail",
    "MappingValidator",
    "MetricValidator",
    "SchemaMappingError",
]
