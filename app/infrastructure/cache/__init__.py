"""Cache: Redis service and cache key utilities.

Used by the listing service and the invalidation trigger for cached HTTP
reads. CacheService uses app.core.config; key format is in keys.py (DRY).
"""

from app.infrastructure.cache.keys import (
    escape_match_pattern,
    response_key,
    route_prefix,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "escape_match_pattern",
    "response_key",
    "route_prefix",
]
