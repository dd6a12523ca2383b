"""Product aggregate: a catalogue entry owned by a vendor."""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, Identifier, Integer, String, Text

from storefront.catalogue.events import ProductAdded, ProductDetailsUpdated
from storefront.domain import storefront


class ProductCategory(Enum):
    FOOD = "Food"
    GROCERIES = "Groceries"
    PHARMACY = "Pharmacy"
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    OTHER = "Other"


# Fields a vendor may change after creation. Vendor, rating and review
# counts are never updatable.
UPDATABLE_FIELDS = (
    "name",
    "description",
    "price",
    "category",
    "image",
    "in_stock",
    "stock_quantity",
    "tags",
    "featured",
    "discount_percentage",
)


@storefront.aggregate
class Product:
    """A sellable item listed by a vendor.

    ``discounted_price`` is derived from ``price`` and ``discount_percentage``
    and is never stored.
    """

    name: String(required=True, max_length=255)
    description: Text(required=True)
    price: Float(required=True, min_value=0.0)
    category: String(required=True, choices=ProductCategory)
    image: String(max_length=1024)
    in_stock: Boolean(default=True)
    stock_quantity: Integer(default=0, min_value=0)
    tags: Text()  # JSON array of strings
    vendor_id: Identifier(required=True)
    rating: Float(default=0.0, min_value=0.0, max_value=5.0)
    num_reviews: Integer(default=0, min_value=0)
    featured: Boolean(default=False)
    discount_percentage: Float(default=0.0, min_value=0.0, max_value=100.0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def discounted_price_cannot_exceed_price(self):
        if self.price is not None and self.discounted_price > self.price:
            raise ValidationError({"discount_percentage": ["Discounted price cannot exceed the list price"]})

    @property
    def discounted_price(self) -> float:
        return (self.price or 0.0) * (1 - (self.discount_percentage or 0.0) / 100)

    @property
    def tag_list(self) -> list[str]:
        return json.loads(self.tags) if self.tags else []

    @classmethod
    def create(cls, vendor_id, name, description, price, category, tags=None, **optional):
        now = datetime.now(UTC)
        product = cls(
            vendor_id=vendor_id,
            name=name.strip(),
            description=description,
            price=price,
            category=category,
            tags=json.dumps(list(tags or [])),
            created_at=now,
            updated_at=now,
            **{key: value for key, value in optional.items() if value is not None},
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                vendor_id=str(vendor_id),
                name=product.name,
                price=product.price,
                category=product.category,
            )
        )
        return product

    def update_details(self, **changes):
        """Apply allow-listed field changes. ``None`` values are ignored."""
        unknown = sorted(set(changes) - set(UPDATABLE_FIELDS))
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in unknown})

        applied = []
        for field_name in UPDATABLE_FIELDS:
            value = changes.get(field_name)
            if value is None:
                continue
            if field_name == "tags":
                value = json.dumps(list(value))
            elif field_name == "name":
                value = value.strip()
            setattr(self, field_name, value)
            applied.append(field_name)

        if not applied:
            return

        self.updated_at = datetime.now(UTC)
        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                updated_fields=json.dumps(applied),
            )
        )

    def has_stock_for(self, quantity: int) -> bool:
        """Stock check used before adding to a cart.

        A zero ``stock_quantity`` means "not tracked" and does not block.
        """
        if not self.in_stock:
            return False
        return not (self.stock_quantity and self.stock_quantity < quantity)
