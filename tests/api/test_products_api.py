from db.models import Product
from tests.factories import CategoryFactory, ProductFactory


def test_list_is_newest_first_and_paginated(session, client):
    for i in range(5):
        ProductFactory(name=f"Item {i}", slug=f"item-{i}", quantity=i)

    response = client.get("/api/v1/products?page=2&limit=2")

    assert response.status_code == 200
    data = response.get_json()
    assert data["pagination"] == {"total": 5, "page": 2, "limit": 2}
    assert [p["slug"] for p in data["data"]] == ["item-2", "item-1"]
    assert set(data["data"][0]) == {"id", "name", "slug", "quantity"}


def test_search_and_quantity_filters(session, client):
    ProductFactory(name="Blue Widget", slug="blue-widget", quantity=5)
    ProductFactory(name="Red Widget", slug="red-widget", quantity=50)
    ProductFactory(name="Gadget", slug="gadget", quantity=7)

    by_slug = client.get("/api/v1/products", query_string={"search": "blue widget"}).get_json()
    assert [p["slug"] for p in by_slug["data"]] == ["blue-widget"]

    by_qty = client.get("/api/v1/products?search=widget&maxQuantity=10").get_json()
    assert [p["slug"] for p in by_qty["data"]] == ["blue-widget"]

    ranged = client.get("/api/v1/products?minQuantity=6&maxQuantity=60").get_json()
    assert ranged["pagination"]["total"] == 2


def test_get_by_id_and_slug(session, client):
    product = ProductFactory(slug="thing")
    assert client.get(f"/api/v1/products/{product.id}").get_json()["slug"] == "thing"
    assert client.get("/api/v1/products/slug/thing").get_json()["id"] == product.id

    missing = client.get("/api/v1/products/9999")
    assert missing.status_code == 404
    assert missing.get_json() == {"error": "Product not found"}


def test_by_category(session, client):
    cat = CategoryFactory(name="Tools")
    ProductFactory(category=cat)
    ProductFactory(category=cat)

    rows = client.get(f"/api/v1/products/category/{cat.id}").get_json()
    assert len(rows) == 2
    assert {r["category_name"] for r in rows} == {"Tools"}

    empty = client.get(f"/api/v1/products/category/{cat.id + 100}")
    assert empty.status_code == 404


def test_create_requires_token(client):
    response = client.post("/api/v1/products", json={"name": "A", "slug": "a"})
    assert response.status_code == 401
    assert response.get_json() == {"error": "Access denied. No token provided."}


def test_create_with_bad_token(client):
    response = client.post(
        "/api/v1/products", json={"name": "A", "slug": "a"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 403
    assert response.get_json() == {"error": "Invalid or expired token"}


def test_create_product(session, client, auth_headers, count_rows):
    cat = CategoryFactory()
    response = client.post(
        "/api/v1/products",
        json={"name": " Widget ", "slug": "widget", "quantity": 4, "category_id": cat.id},
        headers=auth_headers,
    )

    assert response.status_code == 201
    product = response.get_json()["product"]
    assert (product["name"], product["quantity"], product["category_id"]) == ("Widget", 4, cat.id)
    assert product["created_by"] is not None
    assert count_rows(Product) == 1


def test_create_validation_lists_all_problems(client, auth_headers):
    response = client.post(
        "/api/v1/products",
        json={"name": "", "slug": "Not A Slug", "quantity": -2},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json()["details"] == [
        "Name is required",
        "Slug must contain only lowercase letters, numbers, and hyphens",
        "Quantity must be a non-negative integer",
    ]


def test_create_with_unknown_category(client, auth_headers):
    response = client.post(
        "/api/v1/products",
        json={"name": "A", "slug": "a", "category_id": 404},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "Invalid category_id"}


def test_duplicate_slug(session, client, auth_headers):
    ProductFactory(slug="taken")
    response = client.post(
        "/api/v1/products", json={"name": "A", "slug": "taken"}, headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.get_json() == {"error": "Slug already exists"}


def test_edit_and_delete(session, client, auth_headers, count_rows):
    product = ProductFactory(slug="old", quantity=1)

    edited = client.patch(
        f"/api/v1/products/{product.id}",
        json={"name": "New", "slug": "new", "quantity": 9},
        headers=auth_headers,
    )
    assert edited.status_code == 200
    body = edited.get_json()["product"]
    assert (body["slug"], body["quantity"]) == ("new", 9)
    assert body["updated_by"] is not None

    deleted = client.delete(f"/api/v1/products/{product.id}", headers=auth_headers)
    assert deleted.get_json()["message"] == "Product deleted"
    assert count_rows(Product) == 0

    again = client.delete(f"/api/v1/products/{product.id}", headers=auth_headers)
    assert again.status_code == 404


def test_quantity_bound_out_of_range(client):
    response = client.get(f"/api/v1/products?maxQuantity={2**70}")
    assert response.status_code == 400
    assert response.get_json() == {"error": "maxQuantity is out of range"}


def test_huge_page_number_is_clamped(session, client):
    ProductFactory()
    response = client.get(f"/api/v1/products?page={10**30}&limit=10")
    assert response.status_code == 200
    assert response.get_json()["data"] == []
