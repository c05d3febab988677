"""Smoke tests for health, readiness and app wiring."""

import pytest
from httpx import AsyncClient

from passage_search.infrastructure.resilience import ResilienceService


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns the HTML landing page."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "/api/v1/autocomplete/suggestions" in response.text


@pytest.mark.requires_db
async def test_ready_lists_circuit_breakers(client: AsyncClient) -> None:
    """GET /api/v1/health/ready returns 200 with every breaker closed."""
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["database"] == "ok"
    assert [b["name"] for b in data["circuit_breakers"]] == ["database", "outbound-http"]
    assert all(b["state"] == "closed" for b in data["circuit_breakers"])


@pytest.mark.requires_db
async def test_ready_is_503_when_circuit_open(
    client: AsyncClient, resilience: ResilienceService
) -> None:
    """An open database breaker makes the service not ready."""
    for _ in range(resilience.database.policy.minimum_throughput):
        resilience.database.breaker.record_failure(TimeoutError())
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["database"] == "unavailable"
    assert "CircuitOpenException" in data["message"]
    assert data["circuit_breakers"][0]["state"] == "open"
