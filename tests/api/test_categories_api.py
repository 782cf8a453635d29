from tests.conftest import PRODUCT_HEADER, make_xlsx


def test_create_and_list(client, auth_headers):
    created = client.post(
        "/api/v1/categories", json={"name": "Đồ dùng văn phòng"}, headers=auth_headers,
    )
    assert created.status_code == 201
    assert created.get_json()["slug"] == "do-dung-van-phong"

    listed = client.get("/api/v1/categories").get_json()
    assert [c["name"] for c in listed] == ["Đồ dùng văn phòng"]


def test_duplicate_slug(client, auth_headers):
    client.post("/api/v1/categories", json={"name": "Tools"}, headers=auth_headers)
    response = client.post("/api/v1/categories", json={"name": "TOOLS"}, headers=auth_headers)
    assert response.status_code == 400


def test_explicit_slug_must_be_valid(client, auth_headers):
    response = client.post(
        "/api/v1/categories", json={"name": "Tools", "slug": "Bad Slug"}, headers=auth_headers,
    )
    assert response.status_code == 400


def test_created_category_is_found_by_import(client, auth_headers, upload):
    client.post("/api/v1/categories", json={"name": "Office Supplies"}, headers=auth_headers)
    content = make_xlsx([("Widget", "widget-1", 5, "office   SUPPLIES")], header=PRODUCT_HEADER)
    response = upload("/api/v1/products/import", content)
    assert response.status_code == 200


def test_unknown_route_is_json(client):
    response = client.get("/api/v1/nothing-here")
    assert response.status_code == 404
    assert "error" in response.get_json()


def test_non_object_body_is_rejected(client, auth_headers):
    response = client.post("/api/v1/categories", json=["Tools"], headers=auth_headers)
    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}
