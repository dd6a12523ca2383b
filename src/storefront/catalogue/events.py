"""Domain events for the Product aggregate."""

from protean.fields import Float, Identifier, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A vendor listed a new product."""

    product_id = Identifier(required=True)
    vendor_id = Identifier(required=True)
    name = String(required=True, max_length=255)
    price = Float(required=True)
    category = String(required=True, max_length=50)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    """One or more allow-listed product fields changed."""

    product_id = Identifier(required=True)
    updated_fields = Text(required=True)  # JSON array of field names
