from datetime import date, timedelta


def test_mutations_are_audited(client, create_product, post_movement):
    product = create_product(quantity=3)
    movement = post_movement(product["id"], "exit", 1).json()
    client.delete(f"/api/products/{product['id']}")

    body = client.get("/api/logs").json()
    assert [entry["action"] for entry in body["data"]] == [
        "PRODUCT_DELETE",
        "STOCK_MOVEMENT_CREATE",
        "PRODUCT_CREATE",
        "PRODUCT_TYPE_CREATE",
    ]
    assert body["pagination"]["total"] == 4

    deleted, posted = body["data"][0], body["data"][1]
    assert deleted["entityId"] == product["id"]
    assert deleted["meta"]["movements"] == 1
    assert posted["resource"] == "stock_movements"
    assert posted["entityId"] == movement["id"]
    assert posted["status"] == "SUCCESS"


def test_rejected_requests_are_not_audited(client, create_product, post_movement):
    product = create_product(quantity=1)
    assert post_movement(product["id"], "exit", 5).status_code == 400

    body = client.get("/api/logs", params={"resource": "stock_movements"}).json()
    assert body["pagination"]["total"] == 0


def test_loss_warning_is_recorded(client, create_product):
    product = create_product(costPrice=100.0, salePrice=150.0)
    client.patch(f"/api/products/{product['id']}", json={"salePrice": 50})

    body = client.get("/api/logs", params={"action": "PRODUCT_UPDATE", "entityId": product["id"]}).json()
    assert len(body["data"]) == 1
    assert body["data"][0]["meta"]["fields"] == ["sale_price"]
    assert len(body["data"][0]["meta"]["warnings"]) == 1


def test_logs_filters_and_paging(client, create_type):
    for i in range(3):
        create_type(f"Type {i}", None)

    body = client.get("/api/logs", params={"action": "PRODUCT_TYPE", "page": 2, "limit": 2}).json()
    assert body["pagination"]["total"] == 3
    assert body["pagination"]["page"] == 2
    assert body["pagination"]["hasPrev"] is True
    assert len(body["data"]) == 1

    today = date.today()
    assert client.get("/api/logs", params={"startDate": today.isoformat()}).json()["pagination"]["total"] == 3
    tomorrow = (today + timedelta(days=1)).isoformat()
    assert client.get("/api/logs", params={"startDate": tomorrow}).json()["data"] == []


def test_logs_reject_bad_dates(client):
    assert client.get("/api/logs", params={"endDate": "yesterday"}).status_code == 400


def test_health_endpoints(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/").status_code == 200
