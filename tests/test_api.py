"""
tests/test_api.py

HTTP-level tests for the ESG metrics API using FastAPI's TestClient.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from app.config import AppSettings
from app.main import create_app
from app.repositories.metric_store import MetricStore
from factories import CSV_HEADER, csv_document, csv_row, metric_payload


def _create(client: TestClient, **overrides: object) -> dict:
    response = client.post("/api/metrics", json=metric_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


def _upload(client: TestClient, content: str, *, filename: str = "metrics.csv", content_type: str = "text/csv", **params):
    return client.post(
        "/api/import/csv",
        files={"file": (filename, content.encode("utf-8"), content_type)},
        params=params,
    )


@pytest.fixture()
def seeded_client() -> Iterator[TestClient]:
    with TestClient(create_app(settings=AppSettings(seed_sample_data=True))) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "ESG Data Management API is running"}


def test_unknown_route_uses_failure_envelope(client: TestClient) -> None:
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json()["success"] is False


class TestMetricsCrud:
    def test_create_returns_record_with_id(self, client: TestClient) -> None:
        response = client.post("/api/metrics", json=metric_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["id"]
        assert body["data"]["reportedBy"] == "Carlos Silva"
        assert body["data"]["dateReported"] == "2024-07-01T10:00:00.000Z"

    def test_create_rejects_invalid_payload(self, client: TestClient) -> None:
        response = client.post("/api/metrics", json=metric_payload(value=-5, period="24"))

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "Validation failed"
        assert {detail["field"] for detail in body["details"]} == {"value", "period"}
        assert client.get("/api/metrics").json()["data"] == []

    def test_create_rejects_client_id(self, client: TestClient) -> None:
        response = client.post("/api/metrics", json=metric_payload(id="abc"))
        assert response.status_code == 400

    def test_create_rejects_malformed_json(self, client: TestClient) -> None:
        response = client.post(
            "/api/metrics",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Validation failed"

    def test_list_filters_by_category(self, client: TestClient) -> None:
        env = _create(client, category="environmental")
        social = _create(client, category="social")

        all_ids = [item["id"] for item in client.get("/api/metrics").json()["data"]]
        social_ids = [item["id"] for item in client.get("/api/metrics", params={"category": "social"}).json()["data"]]
        other = client.get("/api/metrics", params={"category": "other"}).json()["data"]

        assert all_ids == [env["id"], social["id"]]
        assert social_ids == [social["id"]]
        assert other == []

    def test_get_by_id(self, client: TestClient) -> None:
        created = _create(client)

        assert client.get(f"/api/metrics/{created['id']}").json()["data"] == created
        missing = client.get("/api/metrics/does-not-exist")
        assert missing.status_code == 404
        assert missing.json()["error"] == "Metric not found"

    def test_partial_update(self, client: TestClient) -> None:
        created = _create(client, notes="original")

        response = client.put(f"/api/metrics/{created['id']}", json={"value": 42})

        assert response.status_code == 200
        updated = response.json()["data"]
        assert updated["value"] == 42
        assert updated["notes"] == "original"
        assert updated["id"] == created["id"]

    def test_update_unknown_id(self, client: TestClient) -> None:
        response = client.put("/api/metrics/missing", json={"value": 1})

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Metric not found"}

    def test_update_rejects_invalid_fields(self, client: TestClient) -> None:
        created = _create(client)

        response = client.put(f"/api/metrics/{created['id']}", json={"category": "other"})

        assert response.status_code == 400
        assert client.get(f"/api/metrics/{created['id']}").json()["data"]["category"] == "environmental"

    def test_delete_then_not_found(self, client: TestClient) -> None:
        created = _create(client)

        response = client.delete(f"/api/metrics/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"success": True, "message": "Metric deleted successfully"}

        assert client.delete(f"/api/metrics/{created['id']}").status_code == 404
        assert client.put(f"/api/metrics/{created['id']}", json={"value": 1}).status_code == 404


class TestDashboard:
    def test_counts_and_trends(self, client: TestClient) -> None:
        _create(client, category="environmental", value=1000)
        _create(client, category="environmental", value=1)
        _create(client, category="social")

        body = client.get("/api/dashboard").json()

        assert body["data"]["summary"] == {"environmental": 2, "social": 1, "governance": 0}
        assert len(body["data"]["metrics"]) == 3
        assert [point["period"] for point in body["data"]["trends"]] == ["2024-Q1", "2023-Q4"]

    def test_store_failure_returns_500(
        self,
        client: TestClient,
        store: MetricStore,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        def _boom() -> list:
            raise RuntimeError("store unavailable")

        monkeypatch.setattr(store, "list_all", _boom)

        response = client.get("/api/dashboard")

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to fetch dashboard data"}


class TestUsers:
    def test_list_seeded_users(self, seeded_client: TestClient) -> None:
        users = seeded_client.get("/api/users").json()["data"]
        assert [(user["name"], user["role"]) for user in users] == [
            ("Carlos Silva", "esg"),
            ("Ana Souza", "leadership"),
        ]

    def test_get_user(self, seeded_client: TestClient) -> None:
        assert seeded_client.get("/api/users/1").json()["data"]["name"] == "Carlos Silva"
        assert seeded_client.get("/api/users/99").status_code == 404

    def test_seeded_metrics_are_present(self, seeded_client: TestClient) -> None:
        summary = seeded_client.get("/api/dashboard").json()["data"]["summary"]
        assert summary == {"environmental": 1, "social": 1, "governance": 0}


class TestCsvImport:
    def test_imports_valid_rows(self, client: TestClient) -> None:
        response = _upload(client, csv_document(csv_row(), csv_row(category="social")))

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Successfully imported 2 metrics"
        assert len(body["data"]) == 2
        assert "details" not in body
        assert len(client.get("/api/metrics").json()["data"]) == 2

    def test_partial_import_reports_failures(self, client: TestClient) -> None:
        response = _upload(client, csv_document(csv_row(), csv_row(value="-5")))

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Successfully imported 1 metrics"
        assert body["details"]["rowsFailed"] == 1
        assert body["details"]["errors"][0]["rowNumber"] == 3
        assert body["details"]["errors"][0]["column"] == "value"

    def test_all_rows_invalid_returns_400(self, client: TestClient) -> None:
        response = _upload(client, csv_document(csv_row(value="-5", period="2024-Q1")))

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Failed to import CSV data"
        assert body["details"]["rowsProcessed"] == 1
        assert client.get("/api/metrics").json()["data"] == []

    def test_header_only_file_imports_nothing(self, client: TestClient) -> None:
        response = _upload(client, CSV_HEADER + "\n")

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully imported 0 metrics"

    def test_validate_only_does_not_store(self, client: TestClient) -> None:
        response = _upload(client, csv_document(csv_row()), validate_only="true")

        assert response.status_code == 200
        assert response.json()["message"] == "Successfully validated 1 metrics"
        assert client.get("/api/metrics").json()["data"] == []

    def test_missing_file_returns_400(self, client: TestClient) -> None:
        response = client.post("/api/import/csv")

        assert response.status_code == 400
        assert response.json()["error"] == "No file uploaded"

    def test_non_csv_file_returns_400(self, client: TestClient) -> None:
        response = _upload(client, "hello", filename="notes.txt", content_type="text/plain")

        assert response.status_code == 400
        assert response.json()["error"] == "Only CSV files are allowed"

    def test_missing_required_header_returns_400(self, client: TestClient) -> None:
        response = _upload(client, "category,metric\nenvironmental,CO2\n")

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Failed to import CSV data"
        assert "value" in body["details"]["message"]

    def test_malformed_csv_returns_500(self, client: TestClient) -> None:
        response = _upload(client, csv_document('"environmental"x,CO2,10,t,2024,S,R,2024-01-01T00:00:00.000Z,true,'))

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to parse CSV file"

    def test_parse_failure_keeps_earlier_rows_out_of_store(self, client: TestClient) -> None:
        document = csv_document(
            csv_row(),
            csv_row(category="social"),
            'environmental,"CO2 unterminated,10,t,2024,S,R,2024-01-01T00:00:00.000Z,true,',
        )

        response = _upload(client, document)

        assert response.status_code == 500
        assert client.get("/api/metrics").json()["data"] == []


class TestCsvExport:
    def test_download_headers_and_body(self, client: TestClient) -> None:
        _create(client)
        _create(client, category="social")

        response = client.get("/api/export/csv")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert 'filename="esg-metrics.csv"' in response.headers["content-disposition"]
        assert response.headers["x-row-count"] == "2"
        lines = response.text.split("\r\n")
        assert lines[0].startswith("ID,Category,Metric,Value")
        assert len([line for line in lines if line]) == 3

    def test_export_then_import_round_trip(self, client: TestClient) -> None:
        original = _create(
            client,
            category="governance",
            metric="Independent directors",
            value=4,
            unit="seats",
            period="2023",
            source="Board register",
            reportedBy="Ana Souza",
            dateReported="2023-06-30T12:30:00.250Z",
            verified=False,
            notes="keep, quoted",
        )
        exported = client.get("/api/export/csv").text

        response = _upload(client, exported)

        assert response.status_code == 200
        metrics = client.get("/api/metrics").json()["data"]
        assert len(metrics) == 2
        assert metrics[0]["id"] != metrics[1]["id"]
        reimported = {key: value for key, value in metrics[1].items() if key != "id"}
        assert reimported == {key: value for key, value in original.items() if key != "id"}
