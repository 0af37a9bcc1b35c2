def test_create_and_get_product_type(client):
    resp = client.post("/api/product-types", json={"name": "  Gaming ", "description": "Consoles"})
    assert resp.status_code == 201
    created = resp.json()
    assert created["name"] == "Gaming"

    resp = client.get(f"/api/product-types/{created['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"id": created["id"], "name": "Gaming", "description": "Consoles"}


def test_blank_name_is_rejected(client):
    resp = client.post("/api/product-types", json={"name": "   "})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Name is required"
    assert body["errors"][0]["field"] == "name"


def test_name_longer_than_100_characters_is_rejected(client):
    resp = client.post("/api/product-types", json={"name": "x" * 101})
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "name"


def test_missing_product_type_is_404(client):
    resp = client.get("/api/product-types/999")
    assert resp.status_code == 404
    assert resp.json()["message"] == "Product type 999 not found"


def test_list_is_plain_without_paging(client, create_type):
    create_type("Computadores", "Desktops e notebooks")
    create_type("Periféricos", "Mouses, teclados e acessórios")

    resp = client.get("/api/product-types")
    assert resp.status_code == 200
    names = [t["name"] for t in resp.json()]
    assert names == ["Computadores", "Periféricos"]


def test_list_search_matches_name_and_description(client, create_type):
    create_type("Computadores", "Desktops e notebooks")
    create_type("Periféricos", "Mouses, teclados e acessórios")

    resp = client.get("/api/product-types", params={"search": "teclados"})
    assert [t["name"] for t in resp.json()] == ["Periféricos"]


def test_list_pagination_envelope(client, create_type):
    for i in range(5):
        create_type(f"Type {i}", None)

    resp = client.get("/api/product-types", params={"page": 2, "limit": 2})
    assert resp.status_code == 200
    body = resp.json()
    assert [t["name"] for t in body["data"]] == ["Type 2", "Type 3"]
    assert body["pagination"] == {
        "page": 2,
        "limit": 2,
        "total": 5,
        "totalPages": 3,
        "hasNext": True,
        "hasPrev": True,
    }


def test_patch_updates_only_given_fields(client, create_type):
    created = create_type("Smartphones", "Celulares")

    resp = client.patch(f"/api/product-types/{created['id']}", json={"description": "Telefones"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Smartphones"
    assert resp.json()["description"] == "Telefones"


def test_delete_unused_type(client, create_type):
    created = create_type()
    resp = client.delete(f"/api/product-types/{created['id']}")
    assert resp.status_code == 204
    assert client.get(f"/api/product-types/{created['id']}").status_code == 404


def test_delete_type_in_use_is_rejected(client, create_type, create_product):
    product_type = create_type()
    create_product(type_id=product_type["id"])

    resp = client.delete(f"/api/product-types/{product_type['id']}")
    assert resp.status_code == 400
    assert "cannot be deleted" in resp.json()["message"]
    assert client.get(f"/api/product-types/{product_type['id']}").status_code == 200


def test_search_underscore_is_not_a_wildcard(client, create_type):
    create_type("Home_Office", None)
    create_type("HomeXOffice", None)

    resp = client.get("/api/product-types", params={"search": "home_"})
    assert [t["name"] for t in resp.json()] == ["Home_Office"]
