"""
app/repositories/metric_store.py

In-memory store that owns the metric and user collections.
"""

from __future__ import annotations

import dataclasses
import itertools
import logging
import threading
from collections.abc import Iterable, Mapping
from typing import Any

from app.domain.errors import MetricNotFoundError, UserNotFoundError
from app.domain.esg_metric import METRIC_FIELDS, MetricInput, MetricRecord, User
from app.repositories.seed_data import SAMPLE_METRICS, SAMPLE_USERS

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = frozenset(METRIC_FIELDS)


class MetricStore:
    """
    Authoritative in-memory collection of metric and user records.

    Records are frozen values: an update swaps in a new record, so readers
    holding a snapshot never see a partially applied change. Each operation
    runs under one lock, and ids come from a sequence counter.
    """

    def __init__(
        self,
        *,
        metrics: Iterable[MetricRecord] = (),
        users: Iterable[User] = (),
    ) -> None:
        self._lock = threading.Lock()
        self._metrics: list[MetricRecord] = []
        self._users: list[User] = list(users)

        seen_ids: set[str] = set()
        for record in metrics:
            if record.id in seen_ids:
                raise ValueError(f"Duplicate metric id in seed data: {record.id}")
            seen_ids.add(record.id)
            self._metrics.append(record)

        numeric_ids = [int(metric_id) for metric_id in seen_ids if metric_id.isdigit()]
        self._id_sequence = itertools.count(max(numeric_ids, default=0) + 1)

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def list_all(self) -> list[MetricRecord]:
        """
        Return every metric in insertion order as a new list.
        """

        with self._lock:
            return list(self._metrics)

    def list_by_category(self, category: str) -> list[MetricRecord]:
        """
        Return metrics whose category matches exactly.
        """

        with self._lock:
            return [record for record in self._metrics if record.category == category]

    def count(self) -> int:
        with self._lock:
            return len(self._metrics)

    def get(self, metric_id: str) -> MetricRecord:
        """
        Return one metric or raise MetricNotFoundError.
        """

        with self._lock:
            return self._metrics[self._index_of(metric_id)]

    def create(self, fields: MetricInput) -> MetricRecord:
        """
        Append a new metric under a freshly assigned id.
        """

        with self._lock:
            metric_id = self._next_id()
            record = MetricRecord.from_input(metric_id, fields)
            self._metrics.append(record)

        logger.info("Metric created id=%s category=%s metric=%r", record.id, record.category, record.metric)
        return record

    def update(self, metric_id: str, patch: Mapping[str, Any]) -> MetricRecord:
        """
        Merge supplied fields over an existing metric and return the result.

        An empty patch returns the stored record unchanged.
        """

        unknown = set(patch) - _UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update metric fields: {', '.join(sorted(unknown))}")

        with self._lock:
            index = self._index_of(metric_id)
            if not patch:
                return self._metrics[index]
            updated = dataclasses.replace(self._metrics[index], **patch)
            self._metrics[index] = updated

        logger.info("Metric updated id=%s fields=%s", metric_id, ",".join(sorted(patch)))
        return updated

    def remove(self, metric_id: str) -> None:
        """
        Delete a metric or raise MetricNotFoundError.
        """

        with self._lock:
            index = self._index_of(metric_id)
            del self._metrics[index]

        logger.info("Metric deleted id=%s", metric_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_users(self) -> list[User]:
        with self._lock:
            return list(self._users)

    def get_user(self, user_id: str) -> User:
        with self._lock:
            for user in self._users:
                if user.id == user_id:
                    return user
        raise UserNotFoundError(user_id)

    # ------------------------------------------------------------------
    # Internals (caller holds the lock)
    # ------------------------------------------------------------------

    def _index_of(self, metric_id: str) -> int:
        for index, record in enumerate(self._metrics):
            if record.id == metric_id:
                return index
        raise MetricNotFoundError(metric_id)

    def _next_id(self) -> str:
        # The sequence starts past every numeric seed id.
        return str(next(self._id_sequence))


def build_seeded_store() -> MetricStore:
    """
    Build a store holding the sample users and metrics.
    """

    return MetricStore(metrics=SAMPLE_METRICS, users=SAMPLE_USERS)
