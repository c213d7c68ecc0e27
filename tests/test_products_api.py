"""Tests for the storefront product routes."""

from __future__ import annotations

import re

import pytest


def _payload(**overrides):
    payload = {
        "name": "Aurora Horizon Laptop",
        "price": "1299.999",
        "description": "Thin and light laptop with an all-day battery.",
        "category": "Laptops",
        "tags": "ultrabook, travel , ",
        "featured": True,
        "stock_quantity": "7",
        "image": "https://example.com/aurora.jpg",
    }
    payload.update(overrides)
    return payload


@pytest.mark.asyncio
async def test_create_product_generates_sku(client):
    response = await client.post(
        "/products",
        json=_payload(),
        headers={"X-Admin-Id": "admin-1"},
    )

    assert response.status_code == 201
    product = response.json()["product"]
    assert re.fullmatch(r"LAP-[0-9A-Z]{6}", product["sku"])
    assert product["tags"] == ["ultrabook", "travel"]
    assert product["price"] == 1300.0
    assert product["stock_quantity"] == 7
    assert product["is_active"] is True
    assert product["created_by"] == "admin-1"


@pytest.mark.asyncio
async def test_create_product_rejects_duplicate_sku(client):
    first = await client.post("/products", json=_payload(sku="abc-123"))
    second = await client.post("/products", json=_payload(name="Other Laptop", sku="ABC-123"))

    assert first.status_code == 201
    assert first.json()["product"]["sku"] == "ABC-123"
    assert second.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "X"},
        {"price": -1},
        {"description": "too short"},
        {"stock_quantity": -3},
        {"tags": ["ok", ""]},
    ],
)
async def test_create_product_validation(client, overrides):
    response = await client.post("/products", json=_payload(**overrides))

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_get_update_delete_product(client):
    created = await client.post("/products", json=_payload())
    product_id = created.json()["product"]["id"]

    fetched = await client.get(f"/products/{product_id}")
    assert fetched.status_code == 200
    assert fetched.json()["product"]["name"] == "Aurora Horizon Laptop"

    updated = await client.put(
        f"/products/{product_id}",
        json={"price": 999, "tags": "sale", "stock_quantity": 0},
    )
    assert updated.status_code == 200
    body = updated.json()["product"]
    assert body["price"] == 999
    assert body["tags"] == ["sale"]
    assert body["stock_quantity"] == 0
    assert body["name"] == "Aurora Horizon Laptop"
    assert body["updated_at"] >= body["created_at"]

    deleted = await client.delete(f"/products/{product_id}")
    assert deleted.status_code == 200
    assert (await client.get(f"/products/{product_id}")).status_code == 404


@pytest.mark.asyncio
async def test_missing_product_returns_404(client):
    assert (await client.get("/products/missing")).status_code == 404
    assert (await client.put("/products/missing", json={"price": 1})).status_code == 404
    assert (await client.delete("/products/missing")).status_code == 404


@pytest.mark.asyncio
async def test_list_products_filters_and_paginates(client):
    for name, price, category in [
        ("Budget Laptop", 400, "Laptops"),
        ("Gaming Laptop", 1800, "Laptops"),
        ("Office Laptop", 700, "laptops"),
        ("Phone", 600, "Phones"),
    ]:
        response = await client.post(
            "/products",
            json=_payload(name=name, price=price, category=category, featured=False),
        )
        assert response.status_code == 201

    hidden = await client.post("/products", json=_payload(name="Hidden Laptop", price=100))
    await client.put(f"/products/{hidden.json()['product']['id']}", json={"is_active": False})

    response = await client.get(
        "/products",
        params={
            "category": "LAPTOP",
            "sortBy": "price",
            "sortOrder": "asc",
            "limit": "2",
            "page": "1",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [item["name"] for item in data["items"]] == ["Budget Laptop", "Office Laptop"]
    assert data["pagination"] == {
        "page": 1,
        "limit": 2,
        "total": 3,
        "totalPages": 2,
        "hasNext": True,
        "hasPrev": False,
    }
    assert "created_by" not in data["items"][0]


@pytest.mark.asyncio
async def test_list_products_tolerates_bad_params(client):
    await client.post("/products", json=_payload())

    response = await client.get(
        "/products",
        params={"page": "-2", "limit": "zero", "minPrice": "abc", "sortBy": "rating"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["pagination"]["page"] == 1
    assert data["pagination"]["limit"] == 12
    assert len(data["items"]) == 1


@pytest.mark.asyncio
async def test_list_products_featured_filter(client):
    await client.post("/products", json=_payload(name="Featured One", featured=True))
    await client.post("/products", json=_payload(name="Regular One", featured=False))

    featured = await client.get("/products", params={"featured": "true"})
    everything = await client.get("/products", params={"featured": "false"})

    assert [item["name"] for item in featured.json()["items"]] == ["Featured One"]
    assert everything.json()["pagination"]["total"] == 2


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes",
    [
        {"tags": ["  "]},
        {"name": "  a "},
        {"description": "   short    "},
    ],
)
async def test_update_product_applies_create_rules(client, changes):
    created = await client.post("/products", json=_payload())
    product_id = created.json()["product"]["id"]

    response = await client.put(f"/products/{product_id}", json=changes)

    assert response.status_code == 422
    fetched = await client.get(f"/products/{product_id}")
    assert fetched.json()["product"]["name"] == "Aurora Horizon Laptop"


@pytest.mark.asyncio
async def test_update_product_strips_text(client):
    created = await client.post("/products", json=_payload())
    product_id = created.json()["product"]["id"]

    response = await client.put(
        f"/products/{product_id}",
        json={"name": "  Aurora Pro  ", "tags": [" sale ", "new"]},
    )

    assert response.status_code == 200
    product = response.json()["product"]
    assert product["name"] == "Aurora Pro"
    assert product["tags"] == ["sale", "new"]


@pytest.mark.asyncio
async def test_deleted_product_frees_its_sku(client):
    created = await client.post("/products", json=_payload(sku="KEEP-1"))
    product_id = created.json()["product"]["id"]

    await client.delete(f"/products/{product_id}")
    reused = await client.post("/products", json=_payload(name="Second Laptop", sku="keep-1"))

    assert reused.status_code == 201
    assert reused.json()["product"]["sku"] == "KEEP-1"


@pytest.mark.asyncio
async def test_list_products_sorted_by_name(client):
    for name in ["beta Speaker", "Alpha Speaker", "Zeta Speaker", "alpha Speaker"]:
        await client.post("/products", json=_payload(name=name, featured=False))

    response = await client.get("/products", params={"sortBy": "name", "sortOrder": "asc"})

    assert [item["name"] for item in response.json()["items"]] == [
        "Alpha Speaker",
        "Zeta Speaker",
        "alpha Speaker",
        "beta Speaker",
    ]
