"""Repository queries against a real Postgres (skipped when none is reachable)."""

from decimal import Decimal
from uuid import uuid4

import pytest

from app.application.dtos.listing import ListingRequest
from app.application.dtos.order import OrderCreate
from app.application.dtos.product import ProductCreate
from app.application.services.listing_query import build_fetch_spec
from app.infrastructure.persistence.repositories import (
    OrderRepository,
    ProductRepository,
    UniversityRepository,
)

pytestmark = pytest.mark.requires_db


@pytest.fixture
async def seeded(db_session):
    """One university and seven products in a category unique to this test."""
    universities = UniversityRepository(db_session)
    products = ProductRepository(db_session)
    university = await universities.create_university(
        name=f"Test University {uuid4().hex[:8]}", location="Testville"
    )
    category = f"it-{uuid4().hex[:8]}"
    created = [
        await products.create_product(
            ProductCreate(
                name=f"Item {i}",
                description="100% cotton" if i == 3 else "plain",
                category=category,
                price=Decimal(5 + i),
                stock=i,
                university_id=university.id,
            )
        )
        for i in range(7)
    ]
    return {"university": university, "category": category, "products": created, "session": db_session}


async def test_fetch_page_window_and_total(seeded) -> None:
    repo = ProductRepository(seeded["session"])
    spec = build_fetch_spec(
        ListingRequest.normalize(page="2", limit="3", category=seeded["category"], sort_by="price", sort_order="ASC")
    )
    rows, total = await repo.fetch_page(spec)
    assert total == 7
    assert [r.price for r in rows] == [Decimal("8.00"), Decimal("9.00"), Decimal("10.00")]
    assert rows[0].university is not None
    assert rows[0].university.location is None


async def test_pages_partition_rows_with_equal_sort_values(seeded) -> None:
    """created_at is the same for every row of one transaction; the id tie-break keeps pages disjoint."""
    repo = ProductRepository(seeded["session"])
    seen: list[str] = []
    for page in ("1", "2", "3"):
        spec = build_fetch_spec(
            ListingRequest.normalize(page=page, limit="3", category=seeded["category"])
        )
        rows, _ = await repo.fetch_page(spec)
        seen.extend(r.id for r in rows)
    assert sorted(seen) == sorted(p.id for p in seeded["products"])


async def test_search_treats_wildcards_literally(seeded) -> None:
    repo = ProductRepository(seeded["session"])
    spec = build_fetch_spec(ListingRequest.normalize(search="100%", category=seeded["category"]))
    rows, total = await repo.fetch_page(spec)
    assert total == 1
    assert rows[0].name == "Item 3"


async def test_soft_delete_hides_product(seeded) -> None:
    repo = ProductRepository(seeded["session"])
    target = seeded["products"][0]
    assert await repo.delete_product(target.id) is True
    assert await repo.get_by_id(target.id) is None
    spec = build_fetch_spec(ListingRequest.normalize(category=seeded["category"]))
    _, total = await repo.fetch_page(spec)
    assert total == 6


async def test_top_universities_sums_amounts(seeded) -> None:
    orders = OrderRepository(seeded["session"])
    university = seeded["university"]
    for amount in ("1000000.00", "0.50"):
        await orders.create_order(
            OrderCreate(
                product_id=seeded["products"][1].id,
                university_id=university.id,
                quantity=1,
                amount=Decimal(amount),
            )
        )
    top = await orders.get_top_universities_by_sales(1)
    assert top[0].university_id == university.id
    assert top[0].total_sales == Decimal("1000000.50")
    assert top[0].order_count == 2
