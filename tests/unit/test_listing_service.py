"""ListingService cache-aside behaviour: hit/miss equivalence, degradation, errors."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.listing import ListingRequest
from app.application.services import CacheWriter, ListingService
from app.domain.exceptions import BackingStoreException, CacheUnavailableException
from app.infrastructure.cache.keys import response_key

ROUTE = "/api/products"


@pytest.fixture
def listing_service(product_repo, fake_cache, cache_writer) -> ListingService:
    return ListingService(product_repo, cache=fake_cache, writer=cache_writer, listing_ttl=300)


async def test_miss_fetches_and_schedules_write(
    catalog, listing_service, product_repo, fake_cache, cache_writer
) -> None:
    req = ListingRequest.normalize(limit="10")
    result = await listing_service.get_listing(ROUTE, req)
    assert product_repo.fetch_calls == 1
    assert result.total_count == 25
    assert len(result.items) == 10

    await cache_writer.drain()
    key = response_key(ROUTE, req.query_params())
    assert fake_cache.store[key] == result.to_dict()
    assert fake_cache.ttls[key] == 300


async def test_hit_returns_cached_page_without_fetching(
    catalog, listing_service, product_repo, cache_writer
) -> None:
    req = ListingRequest.normalize(page="2", limit="5", sort_by="price", sort_order="ASC")
    first = await listing_service.get_listing(ROUTE, req)
    await cache_writer.drain()
    second = await listing_service.get_listing(ROUTE, req)
    assert product_repo.fetch_calls == 1
    assert second == first


async def test_equivalent_requests_share_one_entry(
    catalog, listing_service, product_repo, cache_writer
) -> None:
    """Explicit defaults and omitted parameters hit the same cache entry."""
    await listing_service.get_listing(ROUTE, ListingRequest.normalize())
    await cache_writer.drain()
    await listing_service.get_listing(
        ROUTE, ListingRequest.normalize(page="1", limit="10", sort_order="desc")
    )
    assert product_repo.fetch_calls == 1


async def test_unavailable_cache_always_reads_the_database(
    catalog, listing_service, product_repo, fake_cache, cache_writer
) -> None:
    fake_cache.available = False
    req = ListingRequest.normalize()
    first = await listing_service.get_listing(ROUTE, req)
    second = await listing_service.get_listing(ROUTE, req)
    await cache_writer.drain()
    assert product_repo.fetch_calls == 2
    assert first == second
    assert fake_cache.store == {}


async def test_cache_errors_degrade_to_a_miss(catalog, product_repo) -> None:
    """A cache whose get/set raise CacheUnavailableException never fails the read."""
    cache = AsyncMock()
    cache.is_available = lambda: True
    cache.get.side_effect = CacheUnavailableException("get")
    cache.set.side_effect = CacheUnavailableException("set")
    writer = CacheWriter(cache)
    service = ListingService(product_repo, cache=cache, writer=writer)

    result = await service.get_listing(ROUTE, ListingRequest.normalize(limit="100"))
    await writer.drain()

    assert result.total_count == 25
    assert len(result.items) == 25
    cache.set.assert_awaited_once()


async def test_works_without_a_cache(catalog, product_repo) -> None:
    service = ListingService(product_repo)
    result = await service.get_listing(ROUTE, ListingRequest.normalize(page="3"))
    assert len(result.items) == 5
    assert result.has_next is False


async def test_malformed_cached_entry_is_ignored(
    catalog, listing_service, product_repo, fake_cache
) -> None:
    req = ListingRequest.normalize()
    fake_cache.store[response_key(ROUTE, req.query_params())] = {"items": []}
    result = await listing_service.get_listing(ROUTE, req)
    assert product_repo.fetch_calls == 1
    assert result.total_count == 25


async def test_backing_store_errors_propagate(fake_cache, cache_writer) -> None:
    repo = AsyncMock()
    repo.fetch_page.side_effect = BackingStoreException("fetch products page", "connection reset")
    service = ListingService(repo, cache=fake_cache, writer=cache_writer)
    with pytest.raises(BackingStoreException):
        await service.get_listing(ROUTE, ListingRequest.normalize())
    await cache_writer.drain()
    assert fake_cache.store == {}


async def test_get_or_compute_caches_the_computed_value(listing_service, fake_cache, cache_writer) -> None:
    compute = AsyncMock(return_value=[{"category": "Apparel"}])
    key = response_key("/api/products/categories")

    assert await listing_service.get_or_compute(key, 3600, compute) == [{"category": "Apparel"}]
    await cache_writer.drain()
    assert await listing_service.get_or_compute(key, 3600, compute) == [{"category": "Apparel"}]

    compute.assert_awaited_once()
    assert fake_cache.ttls[key] == 3600
