"""Integration tests for the cart endpoints via TestClient."""

import pytest


@pytest.fixture()
def shopper(register):
    return register(email="shopper@example.com")[1]


@pytest.fixture()
def kettle(register, create_product):
    _, vendor = register(email="vendor@example.com", role="vendor")
    return create_product(vendor, price=30.0)


class TestGetCart:
    def test_requires_token(self, client):
        assert client.get("/cart").status_code == 401

    def test_creates_empty_cart(self, client, shopper):
        response = client.get("/cart", headers=shopper)

        assert response.status_code == 200
        body = response.json()
        assert body["items"] == []
        assert body["total"] == 0.0
        assert client.get("/cart", headers=shopper).json()["id"] == body["id"]


class TestCartItems:
    def test_add_item_example(self, client, shopper, kettle):
        response = client.post("/cart/items", json={"product_id": kettle, "quantity": 2}, headers=shopper)

        assert response.status_code == 200
        body = response.json()
        assert body["subtotal"] == 60.0
        assert body["shipping_cost"] == 0.0
        assert body["tax"] == 4.8
        assert body["total"] == 64.8

        response = client.post("/cart/apply-coupon", json={"coupon_code": "FREESHIP"}, headers=shopper)
        assert response.json()["coupon_discount"] == 0.0
        assert response.json()["total"] == 64.8

    def test_add_unknown_product(self, client, shopper):
        response = client.post("/cart/items", json={"product_id": "missing", "quantity": 1}, headers=shopper)

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}

    def test_add_out_of_stock(self, client, register, create_product, shopper):
        _, vendor = register(email="vendor@example.com")
        product_id = create_product(vendor, stock_quantity=1)

        response = client.post("/cart/items", json={"product_id": product_id, "quantity": 2}, headers=shopper)

        assert response.status_code == 400
        assert response.json() == {"message": "Product is out of stock or has insufficient quantity"}

    def test_quantity_must_be_positive(self, client, shopper, kettle):
        response = client.post("/cart/items", json={"product_id": kettle, "quantity": 0}, headers=shopper)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "quantity"

    def test_patch_sets_quantity(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 1}, headers=shopper)

        response = client.patch(f"/cart/items/{kettle}", json={"quantity": 3}, headers=shopper)

        assert response.status_code == 200
        assert response.json()["items"][0]["quantity"] == 3

    def test_patch_zero_removes(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 1}, headers=shopper)

        response = client.patch(f"/cart/items/{kettle}", json={"quantity": 0}, headers=shopper)

        assert response.json()["items"] == []

    def test_patch_negative_quantity_rejected(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 2}, headers=shopper)

        response = client.patch(f"/cart/items/{kettle}", json={"quantity": -1}, headers=shopper)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "quantity"
        assert client.get("/cart", headers=shopper).json()["items"][0]["quantity"] == 2

    def test_patch_missing_item(self, client, shopper):
        response = client.patch("/cart/items/missing", json={"quantity": 3}, headers=shopper)

        assert response.status_code == 404
        assert response.json() == {"message": "Item not found in cart"}

    def test_delete_item(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 1}, headers=shopper)

        response = client.delete(f"/cart/items/{kettle}", headers=shopper)

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_delete_missing_item(self, client, shopper):
        assert client.delete("/cart/items/missing", headers=shopper).status_code == 404


class TestCoupons:
    def test_invalid_coupon(self, client, shopper):
        response = client.post("/cart/apply-coupon", json={"coupon_code": "BOGUS"}, headers=shopper)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid coupon code"}

    def test_apply_and_remove(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 2}, headers=shopper)

        response = client.post("/cart/apply-coupon", json={"coupon_code": "WELCOME10"}, headers=shopper)
        assert response.json()["coupon_code"] == "WELCOME10"
        assert response.json()["coupon_discount"] == 6.0

        response = client.delete("/cart/coupon", headers=shopper)
        assert response.status_code == 200
        assert response.json()["coupon_code"] is None
        assert response.json()["total"] == 64.8


class TestClearAndCheckout:
    def test_clear_cart(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 2}, headers=shopper)

        response = client.delete("/cart", headers=shopper)

        assert response.status_code == 200
        assert response.json()["items"] == []
        assert response.json()["total"] == 0.0

    def test_checkout_empty_cart(self, client, shopper):
        response = client.post("/cart/checkout", headers=shopper)

        assert response.status_code == 400
        assert response.json() == {"message": "Cart is empty"}

    def test_checkout(self, client, shopper, kettle):
        client.post("/cart/items", json={"product_id": kettle, "quantity": 2}, headers=shopper)

        response = client.post("/cart/checkout", headers=shopper)

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Checkout successful"
        assert body["order"]["total"] == 64.8
        assert body["order"]["items"][0]["quantity"] == 2
        assert client.get("/cart", headers=shopper).json()["items"] == []
