"""Domain exceptions for the passage search application.

Defines domain-level exceptions that represent business rule violations and
unavailability of the data store. These exceptions are independent of
infrastructure concerns. Presentation layer maps them to HTTP responses in
exception handlers.
"""

from typing import Any


class PassageSearchException(Exception):
    """Base exception for all passage search application errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable representation for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(PassageSearchException):
    """Raised when input validation fails (e.g. unknown filter field, blank term)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(PassageSearchException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str | int) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'section').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class ServiceUnavailableException(PassageSearchException):
    """Raised when a dependency cannot serve requests right now (retry later)."""

    def __init__(
        self,
        message: str = "Service temporarily unavailable",
        error_code: str = "SERVICE_UNAVAILABLE",
        details: dict[str, Any] | None = None,
        retry_after_seconds: float | None = None,
    ) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message, error_code, details)


class CircuitOpenException(ServiceUnavailableException):
    """Raised without attempting the operation while a circuit breaker is open."""

    def __init__(self, pipeline: str, retry_after_seconds: float) -> None:
        """Initialize with the pipeline name and seconds until the next probe.

        Args:
            pipeline: Resilience pipeline whose breaker rejected the call.
            retry_after_seconds: Remaining break duration (0 while a probe runs).
        """
        super().__init__(
            f"Circuit for '{pipeline}' is open; operation not attempted",
            "CIRCUIT_OPEN",
            {"pipeline": pipeline, "retry_after_seconds": round(retry_after_seconds, 3)},
            retry_after_seconds=retry_after_seconds,
        )
        self.pipeline = pipeline
