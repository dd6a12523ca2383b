"""Cart coupon management: apply and remove a coupon code."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.management import find_or_create_cart
from storefront.domain import storefront


@storefront.command(part_of="Cart")
class ApplyCoupon:
    """Apply one of the recognised coupon codes to the user's cart."""

    user_id = Identifier(required=True)
    coupon_code = String(required=True, max_length=50)


@storefront.command(part_of="Cart")
class RemoveCoupon:
    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class CartCouponHandler:
    @handle(ApplyCoupon)
    def apply_coupon(self, command):
        cart = find_or_create_cart(command.user_id)
        cart.apply_coupon(command.coupon_code)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveCoupon)
    def remove_coupon(self, command):
        cart = find_or_create_cart(command.user_id)
        cart.remove_coupon()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
