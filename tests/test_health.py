"""Smoke tests for health, readiness and app wiring."""

from types import SimpleNamespace

from httpx import AsyncClient

from bizdesk.main import app


async def test_health_returns_ok(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_ready_is_503_without_backend(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json()["status"] == "not_ready"


async def test_ready_reports_backend_target(bare_client: AsyncClient) -> None:
    app.state.firebase = SimpleNamespace(target="local")
    try:
        response = await bare_client.get("/api/v1/health/ready")
    finally:
        app.state.firebase = None
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "backend_target": "local"}


async def test_tenant_routes_are_503_without_backend(bare_client: AsyncClient) -> None:
    response = await bare_client.get(
        "/api/v1/clients", headers={"Authorization": "Bearer anything"}
    )
    assert response.status_code == 503
    assert response.json()["error"] == "HTTP_ERROR"


async def test_request_id_is_echoed(bare_client: AsyncClient) -> None:
    response = await bare_client.get("/api/v1/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["x-request-id"] == "req-42"
