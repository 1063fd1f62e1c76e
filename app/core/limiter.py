"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the
same instance without circular imports. Central limit strings and
decorators keep rate limits DRY. The global default limit is read from
settings when the first request is checked, not at import.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from app.core.config import get_settings


def _default_limit() -> str:
    return get_settings().rate_limit_default


limiter = Limiter(key_func=get_remote_address, default_limits=[_default_limit])

# Single source of truth for rate limit strings and decorators.
AUTH_LIMIT = "10/minute"
WRITE_ENDPOINT_LIMIT = "120/minute"

limit_auth = limiter.limit(AUTH_LIMIT)
limit_writes = limiter.limit(WRITE_ENDPOINT_LIMIT)
