"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class CircuitBreakerStatus(BaseModel):
    """State of one resilience pipeline's circuit breaker."""

    name: str
    state: str = Field(..., description="closed | open | half_open")
    sampled_calls: int
    failed_calls: int
    retry_after_seconds: float


class ReadinessResponse(BaseModel):
    """Response for GET /health/ready."""

    status: str = Field(default="ok", description="ok | not_ready")
    database: str = Field(default="ok", description="ok | unavailable")
    message: str | None = None
    circuit_breakers: list[CircuitBreakerStatus] = Field(default_factory=list)
