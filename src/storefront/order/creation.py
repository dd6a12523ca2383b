"""Order creation: command and handler."""

import json

import structlog
from protean import handle
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, PaymentMethod

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    items = Text(required=True)  # JSON: list of item dicts
    shipping_address = Text(required=True)  # JSON: address dict
    billing_address = Text()  # JSON: address dict
    payment_method = String(required=True, choices=PaymentMethod)
    subtotal = Float(required=True, min_value=0.0)
    shipping_cost = Float(default=0.0, min_value=0.0)
    tax = Float(default=0.0, min_value=0.0)
    total = Float(required=True, min_value=0.0)
    notes = Text()


def _load_json(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else raw


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        order = Order.create(
            user_id=command.user_id,
            items=_load_json(command.items),
            shipping_address=_load_json(command.shipping_address),
            billing_address=_load_json(command.billing_address),
            payment_method=command.payment_method,
            subtotal=command.subtotal,
            shipping_cost=command.shipping_cost,
            tax=command.tax,
            total=command.total,
            notes=command.notes,
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Order placed",
            order_id=str(order.id),
            user_id=str(command.user_id),
            total=command.total,
        )
        return str(order.id)
