"""
Sample users and metrics loaded into a freshly seeded store.
"""

from __future__ import annotations

from app.domain.esg_metric import MetricRecord, User

SAMPLE_USERS: tuple[User, ...] = (
    User(id="1", name="Carlos Silva", role="esg", department="Sustentabilidade"),
    User(id="2", name="Ana Souza", role="leadership", department="Executivo"),
)

SAMPLE_METRICS: tuple[MetricRecord, ...] = (
    MetricRecord(
        id="1",
        category="environmental",
        metric="Emissões de Carbono",
        value=980.0,
        unit="toneladas CO2e",
        period="2024-Q1",
        source="Sistema de Monitoramento Ambiental",
        reported_by="Carlos Silva",
        date_reported="2024-01-20T00:00:00.000Z",
        verified=True,
        notes="Emissões de escopo 1 e 2",
    ),
    MetricRecord(
        id="2",
        category="social",
        metric="Horas de Treinamento de Funcionários",
        value=12000.0,
        unit="horas",
        period="2024-Q1",
        source="Sistema de RH",
        reported_by="Ana Souza",
        date_reported="2024-02-10T00:00:00.000Z",
        verified=True,
        notes="Treinamento obrigatório anual",
    ),
)
