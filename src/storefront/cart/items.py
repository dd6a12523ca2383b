"""Cart item management: add, re-quantify and remove line items."""

import structlog
from protean import handle
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import Cart
from storefront.cart.management import find_or_create_cart
from storefront.catalogue.management import load_product
from storefront.domain import storefront
from storefront.shared.exceptions import OutOfStockError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Cart")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)


@storefront.command(part_of="Cart")
class UpdateCartItemQuantity:
    """Set a line's quantity. Zero or a negative value removes the line."""

    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = load_product(command.product_id)
        # Stock is checked here, not reserved.
        if not product.has_stock_for(command.quantity):
            raise OutOfStockError()

        cart = find_or_create_cart(command.user_id)
        cart.add_item(product, command.quantity)
        current_domain.repository_for(Cart).add(cart)

        logger.info(
            "Item added to cart",
            cart_id=str(cart.id),
            product_id=str(command.product_id),
            quantity=command.quantity,
        )
        return str(cart.id)

    @handle(UpdateCartItemQuantity)
    def update_quantity(self, command):
        cart = find_or_create_cart(command.user_id)
        cart.update_item_quantity(command.product_id, command.quantity)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        cart = find_or_create_cart(command.user_id)
        cart.remove_item(command.product_id)
        current_domain.repository_for(Cart).add(cart)
        return str(cart.id)
