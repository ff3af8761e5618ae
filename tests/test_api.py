from fastapi.testclient import TestClient

from railway_restarter.main import create_app
from tests.conftest import build_settings


def build_test_client(client, **overrides) -> TestClient:
    app = create_app(build_settings(**overrides), client=client)
    return TestClient(app)


def test_health(production_client):
    response = build_test_client(production_client).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "railway-restarter", "version": "0.1.0"}


def test_manual_threshold_check(production_client):
    response = build_test_client(production_client).post("/api/v1/restart/check")

    assert response.status_code == 200
    body = response.json()
    assert body["workflow"] == "threshold"
    assert body["outcome"] == "restarted"
    assert body["restart_count"] == 1
    assert body["checks"][0]["deployment_id"] == "dep-web-prod"
    assert production_client.restarted == ["dep-web-prod"]


def test_manual_force_restart_reports_missing_service(production_client):
    response = build_test_client(production_client, TARGET_SERVICE_NAME="api").post("/api/v1/restart/force")

    assert response.status_code == 200
    assert response.json()["outcome"] == "service_not_found"
    assert production_client.restarted == []


def test_manual_trigger_requires_control_token(production_client):
    client = build_test_client(production_client, CONTROL_API_TOKEN="s3cret")

    assert client.post("/api/v1/restart/force").status_code == 401
    assert client.post(
        "/api/v1/restart/force", headers={"Authorization": "Bearer wrong"}
    ).status_code == 401
    assert production_client.restarted == []

    response = client.post("/api/v1/restart/force", headers={"Authorization": "Bearer s3cret"})
    assert response.status_code == 200
    assert production_client.restarted == ["dep-web-prod"]


def test_status_lists_jobs_and_last_reports(production_client):
    app = create_app(
        build_settings(MAX_RAM_CRON_INTERVAL_CHECK="*/5 * * * *"),
        client=production_client,
    )

    with TestClient(app) as client:
        client.post("/api/v1/restart/check")
        body = client.get("/api/v1/status").json()

    assert body["running"] is False
    assert [job["id"] for job in body["jobs"]] == ["threshold-check"]
    assert body["jobs"][0]["next_run_time"] is not None
    assert body["last_reports"]["threshold"]["outcome"] == "restarted"
    assert production_client.closed
