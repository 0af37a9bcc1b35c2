import os

# Every test runs against a private in-memory database
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient

import database
from main import app


@pytest.fixture(autouse=True)
def fresh_db():
    database.reset_db()
    yield


@pytest.fixture()
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def db():
    session = database.SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def create_type(client):
    def _create(name="Eletrônicos", description="Produtos eletrônicos em geral"):
        resp = client.post("/api/product-types", json={"name": name, "description": description})
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture()
def create_product(client, create_type):
    def _create(type_id=None, **overrides):
        if type_id is None:
            type_id = create_type()["id"]
        payload = {
            "name": "Phone",
            "costPrice": 100.0,
            "salePrice": 150.0,
            "quantity": 10,
            "supplier": "Acme",
            "productTypeId": type_id,
        }
        payload.update(overrides)
        resp = client.post("/api/products", json=payload)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create


@pytest.fixture()
def post_movement(client):
    def _post(product_id, type_, quantity, **extra):
        payload = {"productId": product_id, "type": type_, "quantity": quantity}
        payload.update(extra)
        return client.post("/api/stock-movements", json=payload)
    return _post
