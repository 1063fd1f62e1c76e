"""University and order endpoints."""

from decimal import Decimal
from uuid import uuid4

from app.application.dtos.order import OrderCreate


async def _order(order_repo, product, university, amount: str) -> None:
    await order_repo.create_order(
        OrderCreate(
            product_id=product.id,
            university_id=university.id,
            quantity=1,
            amount=Decimal(amount),
        )
    )


async def test_list_universities_sorted_by_name(client, catalog) -> None:
    body = (await client.get("/api/universities")).json()
    assert [u["name"] for u in body["data"]] == ["MIT", "Stanford University"]
    assert body["data"][0]["location"] == "Cambridge, MA"


async def test_get_university_404(client, catalog) -> None:
    response = await client.get(f"/api/universities/{uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"]["message"] == "University not found"


async def test_university_writes_are_admin_only(client, catalog, user_headers) -> None:
    response = await client.post(
        "/api/universities", json={"name": "Caltech"}, headers=user_headers
    )
    assert response.status_code == 403


async def test_admin_university_lifecycle(client, catalog, admin_headers, fake_cache) -> None:
    created = await client.post(
        "/api/universities",
        json={"name": "Caltech", "location": "Pasadena, CA"},
        headers=admin_headers,
    )
    assert created.status_code == 201
    university_id = created.json()["data"]["id"]

    duplicate = await client.post(
        "/api/universities", json={"name": "Caltech"}, headers=admin_headers
    )
    assert duplicate.status_code == 409

    fake_cache.store["cache:/api/products?page=1"] = {"items": []}
    updated = await client.put(
        f"/api/universities/{university_id}",
        json={"contactEmail": "shop@caltech.edu"},
        headers=admin_headers,
    )
    assert updated.status_code == 200
    assert updated.json()["data"]["contactEmail"] == "shop@caltech.edu"
    assert fake_cache.store == {}

    deleted = await client.delete(f"/api/universities/{university_id}", headers=admin_headers)
    assert deleted.json()["message"] == "University deleted successfully"
    names = [u["name"] for u in (await client.get("/api/universities")).json()["data"]]
    assert "Caltech" not in names


async def test_top_universities(client, catalog, order_repo) -> None:
    mit, stanford = catalog["universities"]
    products = catalog["products"]
    await _order(order_repo, products[0], mit, "10.00")
    await _order(order_repo, products[1], stanford, "30.00")
    await _order(order_repo, products[2], mit, "5.00")

    body = (await client.get("/api/orders/top-universities", params={"top": 1})).json()
    assert body["data"] == [
        {
            "universityId": stanford.id,
            "totalSales": 30.0,
            "orderCount": 1,
            "university": {"name": "Stanford University", "location": "Stanford, CA"},
        }
    ]

    body = (await client.get("/api/orders/top-universities")).json()
    assert [row["totalSales"] for row in body["data"]] == [30.0, 15.0]


async def test_top_universities_bounds(client) -> None:
    for top in ("0", "51", "abc"):
        response = await client.get("/api/orders/top-universities", params={"top": top})
        assert response.status_code == 400
        assert response.json()["error"]["details"][0]["field"] == "top"


async def test_orders_by_university_include_product(client, catalog, order_repo) -> None:
    mit = catalog["universities"][0]
    await _order(order_repo, catalog["products"][0], mit, "10.00")

    body = (await client.get(f"/api/orders/university/{mit.id}")).json()
    assert len(body["data"]) == 1
    assert body["data"][0]["product"] == {"name": "Product 00", "price": 10.0}
    assert body["data"][0]["status"] == "pending"


async def test_create_order(client, catalog, user_headers, fake_cache, cache_writer) -> None:
    mit = catalog["universities"][0]
    product = catalog["products"][0]
    await client.get("/api/orders/top-universities")
    await cache_writer.drain()
    assert fake_cache.store
    payload = {
        "productId": product.id,
        "universityId": mit.id,
        "quantity": 2,
        "amount": 20,
        "status": "confirmed",
    }

    assert (await client.post("/api/orders", json=payload)).status_code == 401

    response = await client.post("/api/orders", json=payload, headers=user_headers)
    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "confirmed"
    assert data["amount"] == 20.0
    assert not any(k.startswith("cache:/api/orders") for k in fake_cache.store)

    invalid = await client.post(
        "/api/orders", json={**payload, "quantity": 0, "status": "lost"}, headers=user_headers
    )
    assert invalid.status_code == 400
    assert {d["field"] for d in invalid.json()["error"]["details"]} == {"quantity", "status"}

    missing = await client.post(
        "/api/orders", json={**payload, "productId": str(uuid4())}, headers=user_headers
    )
    assert missing.status_code == 404
