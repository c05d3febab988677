"""Pydantic request/response schemas for the API."""

from passage_search.schemas.health import (
    CircuitBreakerStatus,
    HealthResponse,
    ReadinessResponse,
)
from passage_search.schemas.search import (
    PassageResponse,
    SearchFiltersRequest,
    SearchRequestBody,
    SearchResponse,
)
from passage_search.schemas.section import SectionResponse

__all__ = [
    "CircuitBreakerStatus",
    "HealthResponse",
    "PassageResponse",
    "ReadinessResponse",
    "SearchFiltersRequest",
    "SearchRequestBody",
    "SearchResponse",
    "SectionResponse",
]
