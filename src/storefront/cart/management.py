"""Cart management: lazy cart creation, clearing and checkout.

Every user has at most one cart. It is created the first time any cart
operation touches it, so there is no explicit CreateCart endpoint.
"""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def find_or_create_cart(user_id) -> Cart:
    """Return the user's cart, creating and persisting an empty one if needed.

    Two concurrent first requests can both miss the read. The loser of the
    unique ``user_id`` check re-reads the cart the winner stored.
    """
    repo = current_domain.repository_for(Cart)
    cart = repo.find_by_user(str(user_id))
    if cart is not None:
        return cart

    cart = Cart.create(user_id=str(user_id))
    try:
        repo.add(cart)
    except ValidationError:
        existing = repo.find_by_user(str(user_id))
        if existing is None:
            raise
        return existing

    logger.info("Cart created", cart_id=str(cart.id), user_id=str(user_id))
    return cart


@storefront.command(part_of="Cart")
class ClearCart:
    user_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class CheckoutCart:
    """Snapshot the cart into an order summary and empty it."""

    user_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartHandler:
    @handle(ClearCart)
    def clear_cart(self, command):
        cart = find_or_create_cart(command.user_id)
        cart.clear()
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(CheckoutCart)
    def checkout(self, command):
        cart = find_or_create_cart(command.user_id)
        summary = cart.checkout()
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Cart checked out",
            cart_id=str(cart.id),
            user_id=str(command.user_id),
            total=summary["total"],
        )
        return summary
