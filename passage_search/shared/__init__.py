"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by application, infrastructure, and api layers. No business logic.
"""

from passage_search.shared.context import (
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

__all__ = [
    "get_correlation_id",
    "set_correlation_id",
    "reset_correlation_id",
]
