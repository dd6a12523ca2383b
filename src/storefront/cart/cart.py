"""Shopping Cart aggregate: one cart per user, with derived totals.

Totals are never set by clients. Every item or coupon mutation ends by
recomputing them from scratch in ``calculate_totals``:

    subtotal  = round(sum(discounted_price * quantity))
    shipping  = 0 if subtotal > 50.00 else 5.99
    tax       = round(subtotal * 0.08)
    total     = round(subtotal + tax + shipping - coupon_discount)

Each field is rounded half-up to the cent on its own, so ``total`` is the
rounded sum of already-rounded components.
"""

from datetime import UTC, datetime
from decimal import Decimal
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.cart.events import (
    CartCheckedOut,
    CartCleared,
    CartCouponApplied,
    CartItemAdded,
    CartItemRemoved,
    CartQuantityUpdated,
)
from storefront.domain import storefront
from storefront.shared.exceptions import EmptyCartError, InvalidCouponError, ItemNotFoundError
from storefront.shared.money import round_money, sum_money, to_decimal

TAX_RATE = Decimal("0.08")
FREE_SHIPPING_THRESHOLD = Decimal("50.00")
BASE_SHIPPING = Decimal("5.99")
WELCOME_DISCOUNT_RATE = Decimal("0.10")


class CouponCode(Enum):
    WELCOME10 = "WELCOME10"
    FREESHIP = "FREESHIP"


@storefront.entity(part_of="Cart")
class CartItem:
    """A product line with the name and prices captured when it was added."""

    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    discounted_price = Float(required=True, min_value=0.0)
    quantity = Integer(required=True, min_value=1)
    image = String(max_length=1024)
    added_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    subtotal = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    total = Float(default=0.0, min_value=0.0)
    coupon_code = String(max_length=50)
    coupon_discount = Float(default=0.0, min_value=0.0)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(
            user_id=user_id,
            subtotal=0.0,
            tax=0.0,
            shipping_cost=0.0,
            total=0.0,
            coupon_discount=0.0,
            created_at=now,
            updated_at=now,
        )

    # -------------------------------------------------------------------
    # Pricing
    # -------------------------------------------------------------------
    def calculate_totals(self):
        """Recompute subtotal, shipping, tax and total from the current lines."""
        subtotal = round_money(sum_money(to_decimal(item.discounted_price) * item.quantity for item in self.items))
        shipping_cost = 0.0 if to_decimal(subtotal) > FREE_SHIPPING_THRESHOLD else float(BASE_SHIPPING)
        tax = round_money(to_decimal(subtotal) * TAX_RATE)
        total = round_money(
            to_decimal(subtotal) + to_decimal(tax) + to_decimal(shipping_cost) - to_decimal(self.coupon_discount)
        )

        if total < 0:
            raise ValidationError({"total": ["Coupon discount exceeds the cart total"]})

        self.subtotal = subtotal
        self.shipping_cost = shipping_cost
        self.tax = tax
        self.total = total
        self.updated_at = datetime.now(UTC)
        return self

    # -------------------------------------------------------------------
    # Item management
    # -------------------------------------------------------------------
    def _find_item(self, product_id):
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def add_item(self, product, quantity):
        """Add ``quantity`` of ``product``, or increase an existing line.

        An existing line keeps the prices captured when it was first added.
        """
        existing = self._find_item(product.id)

        if existing:
            existing.quantity += quantity
        else:
            self.add_items(
                CartItem(
                    product_id=str(product.id),
                    name=product.name,
                    price=product.price,
                    discounted_price=product.discounted_price,
                    quantity=quantity,
                    image=product.image,
                    added_at=datetime.now(UTC),
                )
            )

        self.calculate_totals()
        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
            )
        )

    def update_item_quantity(self, product_id, quantity):
        """Set the line's quantity. Zero or less removes the line."""
        item = self._find_item(product_id)
        if item is None:
            raise ItemNotFoundError()

        previous_quantity = item.quantity
        if quantity <= 0:
            self.remove_items(item)
        else:
            item.quantity = quantity

        self.calculate_totals()
        self.raise_(
            CartQuantityUpdated(
                cart_id=str(self.id),
                product_id=str(product_id),
                previous_quantity=previous_quantity,
                new_quantity=max(quantity, 0),
            )
        )

    def remove_item(self, product_id):
        item = self._find_item(product_id)
        if item is None:
            raise ItemNotFoundError()

        self.remove_items(item)
        self.calculate_totals()
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))

    def clear(self):
        """Empty the cart, zero every total and drop the coupon."""
        for item in list(self.items):
            self.remove_items(item)

        self.subtotal = 0.0
        self.tax = 0.0
        self.shipping_cost = 0.0
        self.total = 0.0
        self.coupon_code = None
        self.coupon_discount = 0.0
        self.updated_at = datetime.now(UTC)
        self.raise_(CartCleared(cart_id=str(self.id)))

    # -------------------------------------------------------------------
    # Coupons
    # -------------------------------------------------------------------
    def apply_coupon(self, coupon_code):
        """Apply one of the fixed coupon codes.

        The discount is fixed at application time from the current subtotal
        or shipping cost and is not re-evaluated by later mutations.
        """
        if coupon_code == CouponCode.WELCOME10.value:
            discount = round_money(to_decimal(self.subtotal) * WELCOME_DISCOUNT_RATE)
        elif coupon_code == CouponCode.FREESHIP.value:
            discount = self.shipping_cost or 0.0
        else:
            raise InvalidCouponError()

        self.coupon_code = coupon_code
        self.coupon_discount = discount
        self.calculate_totals()
        self.raise_(
            CartCouponApplied(
                cart_id=str(self.id),
                coupon_code=coupon_code,
                discount=discount,
            )
        )

    def remove_coupon(self):
        self.coupon_code = None
        self.coupon_discount = 0.0
        self.calculate_totals()

    # -------------------------------------------------------------------
    # Checkout
    # -------------------------------------------------------------------
    def checkout(self) -> dict:
        """Snapshot the cart as an order summary, then clear it."""
        if not self.items:
            raise EmptyCartError()

        summary = {
            "cart_id": str(self.id),
            "items": [
                {
                    "product_id": str(item.product_id),
                    "name": item.name,
                    "price": item.price,
                    "discounted_price": item.discounted_price,
                    "quantity": item.quantity,
                    "image": item.image,
                }
                for item in self.line_items
            ],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "shipping_cost": self.shipping_cost,
            "coupon_discount": self.coupon_discount,
            "total": self.total,
            "timestamp": datetime.now(UTC).isoformat(),
        }

        self.raise_(
            CartCheckedOut(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                item_count=len(self.items),
                total=self.total,
            )
        )
        self.clear()
        return summary

    @property
    def line_items(self) -> list[CartItem]:
        """Items in the order they were added."""
        return sorted(self.items, key=lambda item: item.added_at or datetime.min.replace(tzinfo=UTC))
