"""
app/repositories package marker.
"""

from app.repositories.metric_store import MetricStore, build_seeded_store

__all__ = [
    "MetricStore",
    "build_seeded_store",
]
