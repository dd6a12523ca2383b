"""FastAPI endpoints for the caller's shopping cart.

Every route acts on the authenticated user's single cart, creating it on
first use.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import (
    AddToCartRequest,
    ApplyCouponRequest,
    CartResponse,
    CheckoutResponse,
    CheckoutSummary,
    UpdateCartItemRequest,
)
from storefront.cart.coupons import ApplyCoupon, RemoveCoupon
from storefront.cart.items import AddToCart, RemoveFromCart, UpdateCartItemQuantity
from storefront.cart.management import CheckoutCart, ClearCart, find_or_create_cart
from storefront.identity.user import User

cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _cart_of(user: User) -> CartResponse:
    return CartResponse.from_cart(find_or_create_cart(user.id))


@cart_router.get("", response_model=CartResponse)
async def get_cart(user: User = Depends(current_user)) -> CartResponse:
    return _cart_of(user)


@cart_router.post("/items", response_model=CartResponse)
async def add_item(body: AddToCartRequest, user: User = Depends(current_user)) -> CartResponse:
    command = AddToCart(user_id=str(user.id), product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_of(user)


@cart_router.patch("/items/{product_id}", response_model=CartResponse)
async def update_item_quantity(
    product_id: str, body: UpdateCartItemRequest, user: User = Depends(current_user)
) -> CartResponse:
    command = UpdateCartItemQuantity(user_id=str(user.id), product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_of(user)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_item(product_id: str, user: User = Depends(current_user)) -> CartResponse:
    command = RemoveFromCart(user_id=str(user.id), product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return _cart_of(user)


@cart_router.post("/apply-coupon", response_model=CartResponse)
async def apply_coupon(body: ApplyCouponRequest, user: User = Depends(current_user)) -> CartResponse:
    command = ApplyCoupon(user_id=str(user.id), coupon_code=body.coupon_code)
    current_domain.process(command, asynchronous=False)
    return _cart_of(user)


@cart_router.delete("/coupon", response_model=CartResponse)
async def remove_coupon(user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(RemoveCoupon(user_id=str(user.id)), asynchronous=False)
    return _cart_of(user)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(user: User = Depends(current_user)) -> CartResponse:
    current_domain.process(ClearCart(user_id=str(user.id)), asynchronous=False)
    return _cart_of(user)


@cart_router.post("/checkout", response_model=CheckoutResponse)
async def checkout(user: User = Depends(current_user)) -> CheckoutResponse:
    summary = current_domain.process(CheckoutCart(user_id=str(user.id)), asynchronous=False)
    return CheckoutResponse(order=CheckoutSummary(**summary))
