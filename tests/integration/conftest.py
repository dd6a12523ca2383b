import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api.cart import cart_router
from storefront.api.errors import register_exception_handlers
from storefront.api.orders import order_router
from storefront.api.products import product_router
from storefront.api.users import user_router


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(user_router)
    app.include_router(product_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def register(client):
    """Register a user and return ``(user_id, auth_headers)``."""

    def _register(email="jane@example.com", name="Jane Doe", password="s3cret-pass", **extra):
        response = client.post(
            "/users/register",
            json={"email": email, "name": name, "password": password, **extra},
        )
        assert response.status_code == 201
        body = response.json()
        return body["user"]["id"], {"Authorization": f"Bearer {body['token']}"}

    return _register


@pytest.fixture()
def create_product(client):
    def _create_product(headers, **overrides):
        payload = {
            "name": "Kettle",
            "description": "Boils water",
            "price": 30.0,
            "category": "Electronics",
            "tags": ["kitchen"],
        }
        payload.update(overrides)
        response = client.post("/products", json=payload, headers=headers)
        assert response.status_code == 201
        return response.json()["id"]

    return _create_product
