"""Catalogue management: product create, update and delete commands."""

import json

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.shared.exceptions import AuthorizationError, NotFoundError

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    """List a new product. The requesting user becomes its vendor."""

    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50)
    image = String(max_length=1024)
    in_stock = Boolean()
    stock_quantity = Integer(min_value=0)
    tags = Text()  # JSON array of strings
    featured = Boolean()
    discount_percentage = Float(min_value=0.0, max_value=100.0)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    name = String(max_length=255)
    description = Text()
    price = Float(min_value=0.0)
    category = String(max_length=50)
    image = String(max_length=1024)
    in_stock = Boolean()
    stock_quantity = Integer(min_value=0)
    tags = Text()
    featured = Boolean()
    discount_percentage = Float(min_value=0.0, max_value=100.0)


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id = Identifier(required=True)
    requested_by = Identifier(required=True)


def load_product(product_id) -> Product:
    try:
        return current_domain.repository_for(Product).get(product_id)
    except ObjectNotFoundError:
        raise NotFoundError("Product not found") from None


def _assert_vendor(product: Product, user_id, action: str) -> None:
    if str(product.vendor_id) != str(user_id):
        raise AuthorizationError(f"Unauthorized: You can only {action} your own products")


def _tags(raw):
    if raw is None:
        return None
    return json.loads(raw) if isinstance(raw, str) else list(raw)


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        product = Product.create(
            vendor_id=command.vendor_id,
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            tags=_tags(command.tags),
            image=command.image,
            in_stock=command.in_stock,
            stock_quantity=command.stock_quantity,
            featured=command.featured,
            discount_percentage=command.discount_percentage,
        )
        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), vendor_id=str(command.vendor_id))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = load_product(command.product_id)
        _assert_vendor(product, command.requested_by, "update")

        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            image=command.image,
            in_stock=command.in_stock,
            stock_quantity=command.stock_quantity,
            tags=_tags(command.tags),
            featured=command.featured,
            discount_percentage=command.discount_percentage,
        )
        repo.add(product)
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        product = load_product(command.product_id)
        _assert_vendor(product, command.requested_by, "delete")

        repo.remove(product)
        logger.info("Product removed", product_id=str(command.product_id))
        return str(command.product_id)
