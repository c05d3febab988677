"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules use the same
instance without circular imports. Limit strings come from Settings and are
resolved per request, so tests and deployments can override them.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from passage_search.core.config import get_settings

limiter = Limiter(key_func=get_remote_address)


def _search_limit() -> str:
    return get_settings().search_rate_limit


def _autocomplete_limit() -> str:
    return get_settings().autocomplete_rate_limit


limit_search = limiter.limit(_search_limit)
limit_autocomplete = limiter.limit(_autocomplete_limit)
