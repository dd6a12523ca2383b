"""Tests for the Product aggregate."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.catalogue.events import ProductAdded, ProductDetailsUpdated
from storefront.catalogue.product import Product


def _product(**overrides):
    data = {
        "vendor_id": "vendor-001",
        "name": "  Desk Lamp ",
        "description": "An adjustable lamp",
        "price": 40.0,
        "category": "Electronics",
        "tags": ["lighting", "desk"],
    }
    data.update(overrides)
    return Product.create(**data)


class TestCreateProduct:
    def test_defaults(self):
        product = _product()

        assert product.name == "Desk Lamp"
        assert product.in_stock is True
        assert product.stock_quantity == 0
        assert product.rating == 0.0
        assert product.num_reviews == 0
        assert product.featured is False
        assert product.discount_percentage == 0.0
        assert product.tag_list == ["lighting", "desk"]

    def test_raises_product_added(self):
        product = _product()

        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].vendor_id == "vendor-001"

    def test_unknown_category_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(category="Toys")

    def test_negative_price_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(price=-1.0)

    def test_discount_above_hundred_is_rejected(self):
        with pytest.raises(ValidationError):
            _product(discount_percentage=120.0)


class TestDiscountedPrice:
    def test_without_discount(self):
        assert _product(price=40.0).discounted_price == 40.0

    def test_with_discount(self):
        assert _product(price=40.0, discount_percentage=25.0).discounted_price == 30.0

    def test_never_exceeds_price(self):
        product = _product(price=40.0, discount_percentage=100.0)
        assert product.discounted_price == 0.0
        assert product.discounted_price <= product.price


class TestUpdateDetails:
    def test_updates_allowed_fields(self):
        product = _product()
        product.update_details(price=35.0, tags=["sale"], in_stock=False)

        assert product.price == 35.0
        assert product.tag_list == ["sale"]
        assert product.in_stock is False

        events = [e for e in product._events if isinstance(e, ProductDetailsUpdated)]
        assert json.loads(events[0].updated_fields) == ["price", "in_stock", "tags"]

    def test_none_values_are_ignored(self):
        product = _product()
        product._events.clear()

        product.update_details(name=None, price=None)

        assert product.name == "Desk Lamp"
        assert product._events == []

    @pytest.mark.parametrize("field", ["vendor_id", "rating", "num_reviews"])
    def test_protected_fields_cannot_be_updated(self, field):
        product = _product()

        with pytest.raises(ValidationError) as exc:
            product.update_details(**{field: "x"})

        assert field in exc.value.messages
        assert product.vendor_id == "vendor-001"
        assert product.rating == 0.0


class TestStockCheck:
    def test_out_of_stock_blocks(self):
        assert _product(in_stock=False).has_stock_for(1) is False

    def test_untracked_quantity_does_not_block(self):
        assert _product(stock_quantity=0).has_stock_for(50) is True

    def test_insufficient_quantity_blocks(self):
        assert _product(stock_quantity=3).has_stock_for(4) is False

    def test_sufficient_quantity(self):
        assert _product(stock_quantity=3).has_stock_for(3) is True
