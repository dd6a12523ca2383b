"""Order aggregate: an immutable snapshot of a submitted purchase.

Line items, addresses and amounts are taken from the client as submitted and
never recomputed. After creation only the status, tracking number and
estimated delivery date change.

Status lifecycle:
    Processing → In Transit → Delivered
    Cancelled is reachable from every status except Delivered.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.fields import (
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.order.events import (
    OrderCancelled,
    OrderPlaced,
    OrderStatusChanged,
    OrderTrackingUpdated,
)
from storefront.shared.exceptions import InvalidTransitionError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PROCESSING = "Processing"
    IN_TRANSIT = "In Transit"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(Enum):
    CREDIT_CARD = "Credit Card"
    PAYPAL = "PayPal"
    CASH_ON_DELIVERY = "Cash On Delivery"


class PaymentStatus(Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    FAILED = "Failed"
    REFUNDED = "Refunded"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Order")
class PostalAddress:
    """A shipping or billing address as submitted with the order.

    Later edits to the user's address book do not reach it.
    """

    full_name = String(required=True, max_length=255)
    street_address = String(required=True, max_length=255)
    apartment = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100, default="United States")
    phone = String(max_length=30)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text()
    quantity = Integer(required=True, min_value=1)
    price = Float(required=True, min_value=0.0)
    image = String(max_length=1024)
    position = Integer(default=0)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Order:
    user_id = Identifier(required=True)
    items = HasMany(OrderItem)
    shipping_address = ValueObject(PostalAddress)
    billing_address = ValueObject(PostalAddress)
    status = String(choices=OrderStatus, default=OrderStatus.PROCESSING.value)
    payment_method = String(required=True, choices=PaymentMethod)
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.PENDING.value)
    subtotal = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    tracking_number = String(max_length=255)
    estimated_delivery_date = DateTime()
    notes = Text()
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(
        cls,
        user_id,
        items,
        shipping_address,
        payment_method,
        subtotal,
        total,
        shipping_cost=0.0,
        tax=0.0,
        billing_address=None,
        notes=None,
    ):
        """Build an order from client-supplied lines, addresses and amounts."""
        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            shipping_address=PostalAddress(**shipping_address) if shipping_address else None,
            billing_address=PostalAddress(**billing_address) if billing_address else None,
            status=OrderStatus.PROCESSING.value,
            payment_method=payment_method,
            payment_status=PaymentStatus.PENDING.value,
            subtotal=subtotal,
            shipping_cost=shipping_cost or 0.0,
            tax=tax or 0.0,
            total=total,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        for position, item in enumerate(items):
            order.add_items(
                OrderItem(
                    product_id=item["product_id"],
                    name=item["name"],
                    description=item.get("description"),
                    quantity=item["quantity"],
                    price=item["price"],
                    image=item.get("image"),
                    position=position,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                item_count=len(items),
                total=total,
                payment_method=payment_method,
            )
        )
        return order

    @property
    def line_items(self) -> list[OrderItem]:
        return sorted(self.items, key=lambda item: item.position or 0)

    def set_status(self, new_status):
        """Move to any known status. Only a Delivered order refuses to cancel."""
        if new_status == OrderStatus.CANCELLED.value:
            self.cancel()
            return

        previous = self.status
        self.status = new_status
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderStatusChanged(
                order_id=str(self.id),
                previous_status=previous,
                new_status=new_status,
            )
        )

    def cancel(self):
        if self.status == OrderStatus.DELIVERED.value:
            raise InvalidTransitionError("Cannot cancel a delivered order")

        previous = self.status
        self.status = OrderStatus.CANCELLED.value
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderCancelled(order_id=str(self.id), previous_status=previous))

    def set_tracking(self, tracking_number, estimated_delivery_date=None):
        self.tracking_number = tracking_number
        if estimated_delivery_date is not None:
            self.estimated_delivery_date = estimated_delivery_date
        self.updated_at = datetime.now(UTC)
        self.raise_(
            OrderTrackingUpdated(
                order_id=str(self.id),
                tracking_number=tracking_number,
                estimated_delivery_date=self.estimated_delivery_date,
            )
        )
