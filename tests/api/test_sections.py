"""Sections API tests against the seeded in-memory database."""

import pytest
from httpx import AsyncClient


@pytest.mark.requires_db
async def test_list_sections(client: AsyncClient, seeded) -> None:
    """GET /api/v1/sections returns all sections sorted by name."""
    response = await client.get("/api/v1/sections")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 5
    assert [s["name"] for s in data] == sorted(s["name"] for s in data)
    assert set(data[0]) == {"id", "name", "description"}


@pytest.mark.requires_db
async def test_get_section(client: AsyncClient, seeded) -> None:
    """GET /api/v1/sections/{id} returns one section."""
    response = await client.get("/api/v1/sections/1")
    assert response.status_code == 200
    assert response.json()["name"] == "Kinh Pháp Cú"


@pytest.mark.requires_db
async def test_get_section_not_found(client: AsyncClient, seeded) -> None:
    """Unknown section id returns 404 with the error envelope."""
    response = await client.get("/api/v1/sections/999")
    assert response.status_code == 404
    data = response.json()
    assert data["error"] == "RESOURCE_NOT_FOUND"
    assert data["details"] == {"resource_type": "section", "resource_id": "999"}


@pytest.mark.requires_db
async def test_get_section_invalid_id_is_422(client: AsyncClient) -> None:
    """Non-integer ids fail path validation."""
    response = await client.get("/api/v1/sections/abc")
    assert response.status_code == 422
