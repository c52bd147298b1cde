from fastapi.testclient import TestClient

from app.main import app


client = TestClient(app)


def test_health_check():
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["service"] == "painting-lead-assistant"


def test_health_ready():
    resp = client.get("/health/ready")
    assert resp.status_code == 200
    checks = resp.json()

    assert checks["session_store"] == "InMemorySessionStore"
    # conftest removes the OpenAI client
    assert checks["openai"] is False
    assert checks["ready"] is True


def test_health_info():
    resp = client.get("/health/info")
    assert resp.status_code == 200
    data = resp.json()
    assert data["service"] == "painting-lead-assistant"
    assert data["configuration"]["openai_configured"] is False
    assert data["configuration"]["project_flow_start_command"] == "/project"
    assert data["features"]["durable_sessions"] is False


def test_metrics_endpoint():
    client.get("/health")
    resp = client.get("/metrics")
    assert resp.status_code == 200
    assert "text/plain" in resp.headers.get("content-type", "")
    # Should include at least one metric name from app.main
    assert "api_requests_total" in resp.text
