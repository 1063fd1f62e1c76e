"""Listing service: cache-aside reads for paginated and cached listings.

Cache errors never surface to callers: an unavailable, slow or failing
cache is a miss on read and a logged no-op on write. Backing-store
errors propagate unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from app.application.dtos.listing import ListingRequest, ListingResult
from app.application.interfaces.repositories import IProductRepository
from app.application.interfaces.services import ICacheService
from app.application.services.cache_writer import CacheWriter
from app.application.services.listing_query import build_fetch_spec
from app.domain.exceptions import CacheUnavailableException
from app.infrastructure.cache.keys import response_key
from app.shared.telemetry.tracing import TracedOperation, add_span_attributes

logger = logging.getLogger(__name__)


class ListingService:
    """Paginated product listings and other cached reads (cache-aside).

    The cache is optional: pass cache=None (or a cache that reports
    unavailable) and every read goes straight to the repository.

    Cache fills run in the background, so a fill still in flight when a
    write invalidates the route can re-cache the pre-write page. That
    page stays stale until its TTL expires.
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        cache: ICacheService | None = None,
        writer: CacheWriter | None = None,
        listing_ttl: int = 300,
    ) -> None:
        self.product_repo = product_repo
        self.cache = cache
        self.writer = writer or (CacheWriter(cache) if cache is not None else None)
        self.listing_ttl = listing_ttl

    async def get_listing(self, route: str, request: ListingRequest) -> ListingResult:
        """Return one page of active products for request.

        A cached page is returned unchanged (its TTL is not refreshed). On a
        miss the page is fetched, returned, and written back in the background.

        Args:
            route: Request path the listing is served under (e.g. /api/products).
            request: Normalized listing parameters.

        Raises:
            BackingStoreException: The repository failed (never for cache errors).
        """
        key = response_key(route, request.query_params())
        async with TracedOperation(
            "products.listing", {"listing.page": request.page, "listing.limit": request.limit}
        ):
            cached = await self._read(key)
            if cached is not None:
                try:
                    result = ListingResult.from_dict(cached)
                except (KeyError, TypeError, ValueError):
                    logger.warning("Discarding malformed cached listing %s", key)
                else:
                    add_span_attributes(**{"cache.hit": True})
                    return result
            add_span_attributes(**{"cache.hit": False})

            spec = build_fetch_spec(request)
            records, total = await self.product_repo.fetch_page(spec)
            result = ListingResult(
                items=[r.to_dict() for r in records],
                total_count=total,
                current_page=request.page,
                page_size=request.limit,
            )
            self._schedule_write(key, result.to_dict(), self.listing_ttl)
            return result

    async def get_or_compute(
        self,
        key: str,
        ttl: int,
        compute: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Cache-aside for non-paginated reads: cached value, or compute() and cache it.

        compute() must return a JSON-serializable value; a cached value is
        returned as deserialized JSON.
        """
        cached = await self._read(key)
        if cached is not None:
            return cached
        value = await compute()
        self._schedule_write(key, value, ttl)
        return value

    async def _read(self, key: str) -> Any | None:
        if self.cache is None or not self.cache.is_available():
            return None
        try:
            return await self.cache.get(key)
        except CacheUnavailableException:
            logger.warning("Cache read failed for %s; falling back to database", key)
            return None

    def _schedule_write(self, key: str, value: Any, ttl: int) -> None:
        if self.writer is None or self.cache is None or not self.cache.is_available():
            return
        self.writer.schedule(key, value, ttl)
