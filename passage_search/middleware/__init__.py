"""HTTP middleware: timeout, request ID, correlation ID.

Applied in main app; order matters (last added = outermost).
"""

from passage_search.middleware.correlation_id import CorrelationIDMiddleware
from passage_search.middleware.request_id import RequestIDMiddleware
from passage_search.middleware.timeout import TimeoutMiddleware

__all__ = [
    "CorrelationIDMiddleware",
    "RequestIDMiddleware",
    "TimeoutMiddleware",
]
