"""Invalidation trigger: drop cached reads of a route after a successful write."""

from __future__ import annotations

import logging

from app.application.interfaces.services import ICacheService
from app.domain.exceptions import CacheUnavailableException
from app.infrastructure.cache.keys import route_prefix

logger = logging.getLogger(__name__)


class CacheInvalidator:
    """Clears every cached response whose key starts with a route's prefix.

    Invalidating /api/products also clears /api/products/categories and
    every paginated variant. Failures are logged and swallowed: a stale
    entry expires on its own TTL.
    """

    def __init__(self, cache: ICacheService | None) -> None:
        self.cache = cache

    async def invalidate(self, route: str) -> int:
        """Delete cached entries for route; returns how many were removed (0 on failure)."""
        if self.cache is None or not self.cache.is_available():
            logger.debug("Cache unavailable; skipping invalidation of %s", route)
            return 0
        prefix = route_prefix(route)
        try:
            return await self.cache.delete_prefix(prefix)
        except CacheUnavailableException:
            logger.warning("Cache invalidation failed for %s; entries expire by TTL", prefix)
            return 0

    async def invalidate_many(self, *routes: str) -> int:
        """Invalidate several routes; returns the total removed."""
        total = 0
        for route in routes:
            total += await self.invalidate(route)
        return total
