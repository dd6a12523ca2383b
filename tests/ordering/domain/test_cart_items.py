"""Tests for cart line item management."""

import pytest

from storefront.cart.cart import Cart
from storefront.cart.events import CartItemAdded, CartItemRemoved, CartQuantityUpdated
from storefront.catalogue.product import Product
from storefront.shared.exceptions import ItemNotFoundError


def _product(price=10.0, name="Widget"):
    return Product.create(
        vendor_id="vendor-001",
        name=name,
        description="A test product",
        price=price,
        category="Groceries",
    )


@pytest.fixture
def cart():
    return Cart.create(user_id="user-001")


class TestAddItem:
    def test_add_new_item_snapshots_product(self, cart):
        product = _product(price=12.5, name="Tea")
        cart.add_item(product, 2)

        assert len(cart.items) == 1
        item = cart.items[0]
        assert item.product_id == str(product.id)
        assert item.name == "Tea"
        assert item.price == 12.5
        assert item.discounted_price == 12.5
        assert item.quantity == 2

    def test_adding_same_product_increments_quantity(self, cart):
        product = _product()
        cart.add_item(product, 1)
        cart.add_item(product, 3)

        assert len(cart.items) == 1
        assert cart.items[0].quantity == 4

    def test_existing_line_keeps_first_price(self, cart):
        product = _product(price=10.0)
        cart.add_item(product, 1)

        product.price = 15.0
        cart.add_item(product, 1)

        assert cart.items[0].price == 10.0
        assert cart.subtotal == 20.0

    def test_line_items_keep_insertion_order(self, cart):
        first, second, third = _product(name="A"), _product(name="B"), _product(name="C")
        cart.add_item(first, 1)
        cart.add_item(second, 1)
        cart.add_item(third, 1)

        assert [i.name for i in cart.line_items] == ["A", "B", "C"]

    def test_add_raises_event(self, cart):
        product = _product()
        cart.add_item(product, 2)

        events = [e for e in cart._events if isinstance(e, CartItemAdded)]
        assert len(events) == 1
        assert events[0].product_id == str(product.id)
        assert events[0].quantity == 2


class TestUpdateItemQuantity:
    def test_sets_quantity(self, cart):
        product = _product()
        cart.add_item(product, 2)
        cart.update_item_quantity(str(product.id), 5)

        assert cart.items[0].quantity == 5
        assert cart.subtotal == 50.0

    def test_zero_removes_line(self, cart):
        product = _product()
        cart.add_item(product, 2)
        cart.update_item_quantity(str(product.id), 0)

        assert cart.items == []
        assert cart.subtotal == 0.0

    def test_negative_removes_line(self, cart):
        product = _product()
        cart.add_item(product, 2)
        cart.update_item_quantity(str(product.id), -3)

        assert cart.items == []

    def test_unknown_product_leaves_cart_unchanged(self, cart):
        product = _product()
        cart.add_item(product, 2)
        before = (cart.subtotal, cart.total, cart.items[0].quantity)

        with pytest.raises(ItemNotFoundError) as exc:
            cart.update_item_quantity("missing-product", 1)

        assert exc.value.message == "Item not found in cart"
        assert (cart.subtotal, cart.total, cart.items[0].quantity) == before

    def test_update_raises_event(self, cart):
        product = _product()
        cart.add_item(product, 2)
        cart._events.clear()

        cart.update_item_quantity(str(product.id), 7)

        events = [e for e in cart._events if isinstance(e, CartQuantityUpdated)]
        assert len(events) == 1
        assert events[0].previous_quantity == 2
        assert events[0].new_quantity == 7


class TestRemoveItem:
    def test_remove_item(self, cart):
        keep, drop = _product(name="Keep"), _product(name="Drop")
        cart.add_item(keep, 1)
        cart.add_item(drop, 1)

        cart.remove_item(str(drop.id))

        assert [i.name for i in cart.items] == ["Keep"]
        assert cart.subtotal == 10.0
        assert any(isinstance(e, CartItemRemoved) for e in cart._events)

    def test_remove_unknown_product(self, cart):
        with pytest.raises(ItemNotFoundError):
            cart.remove_item("missing-product")


class TestClear:
    def test_clear_resets_everything(self, cart):
        cart.add_item(_product(price=60.0), 2)
        cart.apply_coupon("WELCOME10")

        cart.clear()

        assert cart.items == []
        assert cart.subtotal == 0.0
        assert cart.tax == 0.0
        assert cart.shipping_cost == 0.0
        assert cart.total == 0.0
        assert cart.coupon_code is None
        assert cart.coupon_discount == 0.0

    def test_clear_empty_cart(self, cart):
        cart.clear()
        assert cart.items == []
        assert cart.total == 0.0
