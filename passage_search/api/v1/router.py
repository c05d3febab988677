"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from passage_search.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from passage_search.api.v1.endpoints import autocomplete, health, search, sections

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(
    autocomplete.router, prefix="/autocomplete", tags=["autocomplete"]
)
api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
