"""Product endpoints over ASGI: listing envelope, validation, caching and writes."""

from uuid import uuid4

import pytest

from app.infrastructure.cache.keys import response_key


async def test_listing_defaults(client, catalog) -> None:
    response = await client.get("/api/products")
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert len(body["data"]) == 10
    assert body["pagination"] == {
        "currentPage": 1,
        "pageSize": 10,
        "totalItems": 25,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": False,
    }
    first = body["data"][0]
    assert first["name"] == "Product 24"
    assert set(first) >= {"id", "name", "price", "universityId", "createdAt", "university"}
    assert "location" not in first["university"] or first["university"]["location"] is None


async def test_last_page_is_partial(client, catalog) -> None:
    """25 items, 10 per page: page 3 holds the last 5."""
    body = (await client.get("/api/products", params={"page": 3, "limit": 10})).json()
    assert len(body["data"]) == 5
    assert body["pagination"]["hasNext"] is False
    assert body["pagination"]["hasPrev"] is True


async def test_page_past_the_end_is_empty(client, catalog) -> None:
    body = (await client.get("/api/products", params={"page": 9})).json()
    assert body["data"] == []
    assert body["pagination"]["totalItems"] == 25


@pytest.mark.parametrize("limit,status", [("1", 200), ("100", 200), ("0", 400), ("101", 400)])
async def test_limit_bounds(client, catalog, limit: str, status: int) -> None:
    response = await client.get("/api/products", params={"limit": limit})
    assert response.status_code == status


@pytest.mark.parametrize(
    "params", [{"page": "0"}, {"page": "-1"}, {"page": "abc"}, {"page": "99999999999999999999"}]
)
async def test_invalid_page_is_rejected(client, catalog, params) -> None:
    response = await client.get("/api/products", params=params)
    assert response.status_code == 400
    error = response.json()["error"]
    assert error["statusCode"] == 400
    assert error["details"][0]["field"] == "page"


async def test_unknown_sort_is_rejected(client, catalog) -> None:
    response = await client.get("/api/products", params={"sortBy": "stock"})
    assert response.status_code == 400
    assert response.json()["success"] is False
    assert response.json()["error"]["details"] == [
        {"field": "sortBy", "message": "sortBy must be one of: name, price, createdAt, category"}
    ]


async def test_sort_by_price_ascending(client, catalog) -> None:
    body = (
        await client.get("/api/products", params={"sortBy": "price", "sortOrder": "asc", "limit": 3})
    ).json()
    assert [item["price"] for item in body["data"]] == [10.0, 11.0, 12.0]


async def test_search_matches_name_or_description(client, catalog) -> None:
    body = (await client.get("/api/products", params={"search": "hoodie"})).json()
    assert body["pagination"]["totalItems"] == 5
    body = (await client.get("/api/products", params={"search": "Product 1"})).json()
    assert body["pagination"]["totalItems"] == 10


async def test_category_filter_is_exact(client, catalog, fake_cache) -> None:
    body = (await client.get("/api/products", params={"category": "Apparel", "limit": 100})).json()
    assert body["pagination"]["totalItems"] == 13
    assert {item["category"] for item in body["data"]} == {"Apparel"}
    body = (await client.get("/api/products", params={"category": "apparel"})).json()
    assert body["pagination"]["totalItems"] == 0


async def test_repeat_request_is_served_from_cache(
    client, catalog, product_repo, fake_cache, cache_writer
) -> None:
    first = await client.get("/api/products", params={"page": 2})
    await cache_writer.drain()
    key = response_key(
        "/api/products", {"page": "2", "limit": "10", "sortBy": "createdAt", "sortOrder": "DESC"}
    )
    assert key in fake_cache.store
    assert fake_cache.ttls[key] == 300

    second = await client.get("/api/products", params={"sortOrder": "DESC", "page": "2"})
    assert product_repo.fetch_calls == 1
    assert second.json() == first.json()


async def test_listing_works_without_cache(client, catalog, product_repo, fake_cache) -> None:
    fake_cache.available = False
    for _ in range(2):
        response = await client.get("/api/products")
        assert response.status_code == 200
        assert response.json()["pagination"]["totalItems"] == 25
    assert product_repo.fetch_calls == 2
    assert fake_cache.store == {}


async def test_created_product_appears_in_next_listing(
    client, catalog, cache_writer, user_headers
) -> None:
    await client.get("/api/products")
    await cache_writer.drain()

    response = await client.post(
        "/api/products",
        json={
            "name": "Campus Umbrella",
            "category": "Accessories",
            "price": 25.5,
            "stock": 12,
            "universityId": catalog["universities"][0].id,
        },
        headers=user_headers,
    )
    assert response.status_code == 201
    created = response.json()
    assert created["message"] == "Product created successfully"

    body = (await client.get("/api/products")).json()
    assert body["pagination"]["totalItems"] == 26
    assert body["data"][0]["id"] == created["data"]["id"]


async def test_categories(client, catalog) -> None:
    response = await client.get("/api/products/categories")
    assert response.status_code == 200
    assert response.json()["data"] == [{"category": "Accessories"}, {"category": "Apparel"}]


async def test_detail_includes_university_location(client, catalog) -> None:
    product = catalog["products"][0]
    body = (await client.get(f"/api/products/{product.id}")).json()
    assert body["data"]["university"] == {
        "id": catalog["universities"][0].id,
        "name": "MIT",
        "location": "Cambridge, MA",
    }


async def test_missing_product_is_404(client, catalog) -> None:
    response = await client.get(f"/api/products/{uuid4()}")
    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {"message": "Product not found", "statusCode": 404},
    }


async def test_writes_require_a_token(client, catalog) -> None:
    response = await client.post("/api/products", json={})
    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Access denied. No token provided."

    response = await client.post(
        "/api/products", json={}, headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert response.status_code == 403
    assert response.json()["error"]["message"] == "Invalid token"


async def test_create_validates_body(client, catalog, user_headers) -> None:
    response = await client.post(
        "/api/products",
        json={"name": "X", "category": "Apparel", "price": -1, "universityId": "nope"},
        headers=user_headers,
    )
    assert response.status_code == 400
    fields = {d["field"] for d in response.json()["error"]["details"]}
    assert {"name", "price", "universityId"} <= fields


async def test_update_changes_only_given_fields(client, catalog, user_headers) -> None:
    product = catalog["products"][1]
    response = await client.put(
        f"/api/products/{product.id}",
        json={"price": 99.99, "description": None},
        headers=user_headers,
    )
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["price"] == 99.99
    assert data["description"] is None
    assert data["name"] == product.name

    empty = await client.put(f"/api/products/{product.id}", json={}, headers=user_headers)
    assert empty.status_code == 400


async def test_delete_is_admin_only(client, catalog, user_headers, admin_headers) -> None:
    product = catalog["products"][2]
    forbidden = await client.delete(f"/api/products/{product.id}", headers=user_headers)
    assert forbidden.status_code == 403
    assert forbidden.json()["error"]["message"] == "Insufficient permissions"

    deleted = await client.delete(f"/api/products/{product.id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Product deleted successfully"}

    assert (await client.get(f"/api/products/{product.id}")).status_code == 404
    body = (await client.get("/api/products")).json()
    assert body["pagination"]["totalItems"] == 24


async def test_update_is_visible_in_cached_listing(
    client, catalog, fake_cache, cache_writer, user_headers
) -> None:
    product = catalog["products"][24]
    before = (await client.get("/api/products")).json()
    await cache_writer.drain()
    assert before["data"][0]["price"] == 34.0
    assert any(k.startswith("cache:/api/products") for k in fake_cache.store)

    response = await client.put(
        f"/api/products/{product.id}", json={"price": 5.25}, headers=user_headers
    )
    assert response.status_code == 200
    assert not any(k.startswith("cache:/api/products") for k in fake_cache.store)

    after = (await client.get("/api/products")).json()
    assert after["data"][0]["id"] == product.id
    assert after["data"][0]["price"] == 5.25


async def test_delete_is_visible_in_cached_listing(
    client, catalog, product_repo, fake_cache, cache_writer, admin_headers
) -> None:
    product = catalog["products"][24]
    await client.get("/api/products")
    await client.get("/api/products", params={"page": 2})
    await cache_writer.drain()
    assert product_repo.fetch_calls == 2

    response = await client.delete(f"/api/products/{product.id}", headers=admin_headers)
    assert response.status_code == 200
    assert not any(k.startswith("cache:/api/products") for k in fake_cache.store)

    body = (await client.get("/api/products")).json()
    assert product_repo.fetch_calls == 3
    assert body["pagination"]["totalItems"] == 24
    assert product.id not in {item["id"] for item in body["data"]}
