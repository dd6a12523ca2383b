"""Order fulfillment: status changes, cancellation and tracking.

Only the user who placed an order may change it.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import DateTime, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.shared.exceptions import AuthorizationError, NotFoundError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    status = String(required=True, choices=OrderStatus)


@storefront.command(part_of="Order")
class CancelOrder:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@storefront.command(part_of="Order")
class UpdateTracking:
    order_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    tracking_number = String(required=True, max_length=255)
    estimated_delivery_date = DateTime()


def load_order(order_id) -> Order:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        raise NotFoundError("Order not found") from None


def load_owned_order(order_id, user_id) -> Order:
    order = load_order(order_id)
    if str(order.user_id) != str(user_id):
        raise AuthorizationError("Unauthorized")
    return order


@storefront.command_handler(part_of=Order)
class FulfillOrderHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        order = load_owned_order(command.order_id, command.requested_by)
        order.set_status(command.status)
        current_domain.repository_for(Order).add(order)

        logger.info("Order status updated", order_id=str(order.id), status=command.status)
        return str(order.id)

    @handle(CancelOrder)
    def cancel_order(self, command):
        order = load_owned_order(command.order_id, command.requested_by)
        order.cancel()
        current_domain.repository_for(Order).add(order)

        logger.info("Order cancelled", order_id=str(order.id))
        return str(order.id)

    @handle(UpdateTracking)
    def update_tracking(self, command):
        order = load_owned_order(command.order_id, command.requested_by)
        order.set_tracking(command.tracking_number, command.estimated_delivery_date)
        current_domain.repository_for(Order).add(order)
        return str(order.id)
