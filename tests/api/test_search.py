"""Search API tests against the seeded in-memory database."""

import pytest
from httpx import AsyncClient

from passage_search.core.config import get_settings
from passage_search.core.limiter import limiter


@pytest.mark.requires_db
async def test_search_returns_page_with_metadata(client: AsyncClient, seeded) -> None:
    """POST /api/v1/search returns one page plus paging metadata."""
    response = await client.post(
        "/api/v1/search",
        json={"search_term": "tâm", "page": 1, "page_size": 4},
    )
    assert response.status_code == 200
    data = response.json()
    assert [r["id"] for r in data["results"]] == [1, 4, 9, 16]
    assert data["total_count"] == 6
    assert data["current_page"] == 1
    assert data["total_pages"] == 2
    assert data["has_next_page"] is True
    assert data["has_previous_page"] is False
    first = data["results"][0]
    assert set(first) == {
        "id",
        "content",
        "section_id",
        "section_name",
        "from_ref",
        "to_ref",
        "type",
        "author",
    }
    assert first["section_name"] == "Kinh Pháp Cú"


@pytest.mark.requires_db
async def test_search_with_filters(client: AsyncClient, seeded) -> None:
    """Filters in the body narrow the results."""
    response = await client.post(
        "/api/v1/search",
        json={
            "search_term": "tâm",
            "filters": {"types": ["Kinh"], "authors": ["Đức Phật"], "section_ids": []},
        },
    )
    assert response.status_code == 200
    assert [r["id"] for r in response.json()["results"]] == [1, 4, 9, 22]


@pytest.mark.requires_db
async def test_search_past_last_page_is_empty(client: AsyncClient, seeded) -> None:
    """A page beyond the end yields no results but keeps the totals."""
    response = await client.post(
        "/api/v1/search", json={"search_term": "tâm", "page": 9, "page_size": 4}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["results"] == []
    assert data["total_count"] == 6
    assert data["has_next_page"] is False
    assert data["has_previous_page"] is True


@pytest.mark.requires_db
@pytest.mark.parametrize("term", ["", "   "])
async def test_search_blank_term_is_400(client: AsyncClient, seeded, term: str) -> None:
    """A blank term is a client error with the standard envelope."""
    response = await client.post("/api/v1/search", json={"search_term": term})
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "VALIDATION_ERROR"
    assert data["details"] == {"field": "search_term"}
    assert data["correlation_id"]
    assert data["timestamp"]


@pytest.mark.requires_db
@pytest.mark.parametrize(
    "body",
    [
        {"search_term": "tâm", "page": 0},
        {"search_term": "tâm", "page_size": 0},
        {"search_term": "tâm", "page_size": 101},
        {"search_term": "x" * 501},
        {"page": 1},
    ],
)
async def test_search_invalid_body_is_422(client: AsyncClient, body: dict) -> None:
    """Out-of-range paging and oversized terms fail request validation."""
    response = await client.post("/api/v1/search", json=body)
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


@pytest.mark.requires_db
async def test_count_endpoint(client: AsyncClient, seeded) -> None:
    """GET /api/v1/search/count honours repeated filter query params."""
    response = await client.get(
        "/api/v1/search/count",
        params={"search_term": "tâm", "section_ids": [1, 2]},
    )
    assert response.status_code == 200
    assert response.json() == 4


@pytest.mark.requires_db
async def test_count_blank_term_is_400(client: AsyncClient) -> None:
    """Count requires a non-blank term."""
    response = await client.get("/api/v1/search/count", params={"search_term": " "})
    assert response.status_code == 400


@pytest.mark.requires_db
async def test_filter_options(client: AsyncClient, seeded) -> None:
    """Filter option endpoints return sorted distinct values."""
    types = (await client.get("/api/v1/search/filters/types")).json()
    authors = (await client.get("/api/v1/search/filters/authors")).json()
    assert set(types) == {"Kinh", "Luận", "Luật", "Sách"}
    assert types == sorted(types)
    assert "Đức Phật" in authors
    assert authors == sorted(authors)


@pytest.mark.requires_db
async def test_search_rate_limited(
    client: AsyncClient, seeded, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Exceeding the configured search rate limit returns 429."""
    monkeypatch.setenv("SEARCH_RATE_LIMIT", "2/minute")
    get_settings.cache_clear()
    limiter.reset()
    try:
        statuses = [
            (await client.post("/api/v1/search", json={"search_term": "tâm"})).status_code
            for _ in range(3)
        ]
    finally:
        monkeypatch.delenv("SEARCH_RATE_LIMIT")
        get_settings.cache_clear()
    assert statuses == [200, 200, 429]
