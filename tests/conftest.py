"""
Shared fixtures for ESG metric tests.

Every test gets its own store; nothing is shared through module state.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config import AppSettings
from app.main import create_app
from app.repositories.metric_store import MetricStore, build_seeded_store


@pytest.fixture()
def store() -> MetricStore:
    """Empty store."""
    return MetricStore()


@pytest.fixture()
def seeded_store() -> MetricStore:
    return build_seeded_store()


@pytest.fixture()
def client(store: MetricStore) -> Iterator[TestClient]:
    app = create_app(settings=AppSettings(seed_sample_data=False), store=store)
    with TestClient(app) as test_client:
        yield test_client
