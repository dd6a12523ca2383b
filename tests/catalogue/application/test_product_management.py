"""Application tests for product create, update and delete commands."""

import json

import pytest
from protean import current_domain

from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from storefront.catalogue.product import Product
from storefront.shared.exceptions import AuthorizationError, NotFoundError


def _create(vendor_id="vendor-001", **overrides):
    data = {
        "vendor_id": vendor_id,
        "name": "Desk Lamp",
        "description": "An adjustable lamp",
        "price": 40.0,
        "category": "Electronics",
        "tags": json.dumps(["lighting"]),
    }
    data.update(overrides)
    return current_domain.process(CreateProduct(**data), asynchronous=False)


def _load(product_id):
    return current_domain.repository_for(Product).get(product_id)


class TestCreateProduct:
    def test_create(self):
        product_id = _create(stock_quantity=5, featured=True)

        product = _load(product_id)
        assert product.vendor_id == "vendor-001"
        assert product.stock_quantity == 5
        assert product.featured is True
        assert product.tag_list == ["lighting"]


class TestUpdateProduct:
    def test_vendor_can_update(self):
        product_id = _create()

        current_domain.process(
            UpdateProduct(product_id=product_id, requested_by="vendor-001", price=35.0, discount_percentage=10.0),
            asynchronous=False,
        )

        product = _load(product_id)
        assert product.price == 35.0
        assert product.discount_percentage == 10.0
        assert product.name == "Desk Lamp"

    def test_other_user_cannot_update(self):
        product_id = _create()

        with pytest.raises(AuthorizationError) as exc:
            current_domain.process(
                UpdateProduct(product_id=product_id, requested_by="intruder", price=1.0),
                asynchronous=False,
            )

        assert exc.value.message == "Unauthorized: You can only update your own products"
        assert _load(product_id).price == 40.0

    def test_unknown_product(self):
        with pytest.raises(NotFoundError) as exc:
            current_domain.process(
                UpdateProduct(product_id="missing", requested_by="vendor-001", price=1.0),
                asynchronous=False,
            )

        assert exc.value.message == "Product not found"


class TestDeleteProduct:
    def test_vendor_can_delete(self):
        product_id = _create()

        current_domain.process(DeleteProduct(product_id=product_id, requested_by="vendor-001"), asynchronous=False)

        assert current_domain.repository_for(Product).find_by_vendor("vendor-001") == []

    def test_other_user_cannot_delete(self):
        product_id = _create()

        with pytest.raises(AuthorizationError):
            current_domain.process(DeleteProduct(product_id=product_id, requested_by="intruder"), asynchronous=False)

        assert _load(product_id).name == "Desk Lamp"
