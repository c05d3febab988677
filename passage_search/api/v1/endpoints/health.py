"""Health check endpoints: liveness and readiness probes."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from passage_search.api.v1.dependencies import get_section_repo
from passage_search.infrastructure.persistence.repositories import SectionRepository
from passage_search.infrastructure.resilience import (
    ResilienceService,
    get_resilience_service,
)
from passage_search.schemas.health import (
    CircuitBreakerStatus,
    HealthResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database unreachable or circuit open", "model": ReadinessResponse}},
)
async def readiness_check(
    section_repo: Annotated[SectionRepository, Depends(get_section_repo)],
    resilience: Annotated[ResilienceService, Depends(get_resilience_service)],
) -> ReadinessResponse | JSONResponse:
    """Return 200 when the database answers through the resilience pipeline; 503 otherwise.

    The response lists every circuit breaker's state either way.
    """
    message: str | None = None
    try:
        await section_repo.ping()
    except Exception as e:
        logger.warning("Readiness check failed: %s", e)
        message = f"Database unavailable: {type(e).__name__}"

    breakers = [
        CircuitBreakerStatus(
            name=s.name,
            state=s.state.value,
            sampled_calls=s.sampled_calls,
            failed_calls=s.failed_calls,
            retry_after_seconds=round(s.retry_after_seconds, 3),
        )
        for s in resilience.snapshots()
    ]
    if message is None:
        return ReadinessResponse(circuit_breakers=breakers)
    return JSONResponse(
        status_code=503,
        content=ReadinessResponse(
            status="not_ready",
            database="unavailable",
            message=message,
            circuit_breakers=breakers,
        ).model_dump(),
    )
