"""FastAPI endpoints for orders. Users only see and change their own."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import (
    CreateOrderRequest,
    OrderResponse,
    UpdateOrderStatusRequest,
    UpdateTrackingRequest,
)
from storefront.identity.user import User
from storefront.order.creation import PlaceOrder
from storefront.order.fulfillment import (
    CancelOrder,
    UpdateOrderStatus,
    UpdateTracking,
    load_order,
    load_owned_order,
)
from storefront.order.order import Order

order_router = APIRouter(prefix="/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=OrderResponse)
async def create_order(body: CreateOrderRequest, user: User = Depends(current_user)) -> OrderResponse:
    command = PlaceOrder(
        user_id=str(user.id),
        items=json.dumps([item.model_dump() for item in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        billing_address=json.dumps(body.billing_address.model_dump()) if body.billing_address else None,
        payment_method=body.payment_method,
        subtotal=body.subtotal,
        shipping_cost=body.shipping_cost,
        tax=body.tax,
        total=body.total,
        notes=body.notes,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(load_order(order_id))


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(user: User = Depends(current_user)) -> list[OrderResponse]:
    orders = current_domain.repository_for(Order).find_by_user(str(user.id))
    return [OrderResponse.from_order(o) for o in orders]


@order_router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    return OrderResponse.from_order(load_owned_order(order_id, user.id))


@order_router.patch("/{order_id}/status", response_model=OrderResponse)
async def update_status(
    order_id: str, body: UpdateOrderStatusRequest, user: User = Depends(current_user)
) -> OrderResponse:
    command = UpdateOrderStatus(order_id=order_id, requested_by=str(user.id), status=body.status)
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(load_order(order_id))


@order_router.post("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(order_id: str, user: User = Depends(current_user)) -> OrderResponse:
    current_domain.process(CancelOrder(order_id=order_id, requested_by=str(user.id)), asynchronous=False)
    return OrderResponse.from_order(load_order(order_id))


@order_router.patch("/{order_id}/tracking", response_model=OrderResponse)
async def update_tracking(
    order_id: str, body: UpdateTrackingRequest, user: User = Depends(current_user)
) -> OrderResponse:
    command = UpdateTracking(
        order_id=order_id,
        requested_by=str(user.id),
        tracking_number=body.tracking_number,
        estimated_delivery_date=body.estimated_delivery_date,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse.from_order(load_order(order_id))
