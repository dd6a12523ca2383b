"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A user submitted an order."""

    order_id = Identifier(required=True)
    user_id = Identifier(required=True)
    item_count = Integer(required=True)
    total = Float(required=True)
    payment_method = String(required=True, max_length=50)


@storefront.event(part_of="Order")
class OrderStatusChanged:
    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=50)
    new_status = String(required=True, max_length=50)


@storefront.event(part_of="Order")
class OrderCancelled:
    order_id = Identifier(required=True)
    previous_status = String(required=True, max_length=50)


@storefront.event(part_of="Order")
class OrderTrackingUpdated:
    order_id = Identifier(required=True)
    tracking_number = String(required=True, max_length=255)
    estimated_delivery_date = DateTime()
