"""Repository for the Product aggregate: vendor, featured and filtered listings."""

import math
from dataclasses import dataclass, field

from storefront.catalogue.product import Product
from storefront.domain import storefront

_SORT_KEYS = {
    "price-asc": (lambda p: p.price, False),
    "price-desc": (lambda p: p.price, True),
    "rating-desc": (lambda p: p.rating or 0.0, True),
    "newest": (lambda p: p.created_at.timestamp() if p.created_at else 0.0, True),
}


@dataclass(frozen=True)
class ProductSearch:
    """Listing criteria. Unset filters match everything."""

    category: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    in_stock: bool | None = None
    featured: bool | None = None
    search: str | None = None
    sort: str | None = None
    limit: int = 10
    page: int = 1


@dataclass(frozen=True)
class ProductPage:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    pages: int = 0


def _matches_text(product: Product, term: str) -> bool:
    needle = term.lower()
    haystacks = [product.name or "", product.description or "", *product.tag_list]
    return any(needle in text.lower() for text in haystacks)


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_vendor(self, vendor_id: str) -> list[Product]:
        return self._dao.query.filter(vendor_id=vendor_id).limit(None).all().items

    def find_featured(self, limit: int = 5) -> list[Product]:
        featured = self._dao.query.filter(featured=True).limit(None).all().items
        return self._sorted(featured, "newest")[:limit]

    def search(self, criteria: ProductSearch) -> ProductPage:
        """Filter, sort and paginate the catalogue."""
        filters = {}
        if criteria.category:
            filters["category"] = criteria.category
        if criteria.in_stock is not None:
            filters["in_stock"] = criteria.in_stock
        if criteria.featured is not None:
            filters["featured"] = criteria.featured
        if criteria.min_price is not None:
            filters["price__gte"] = criteria.min_price
        if criteria.max_price is not None:
            filters["price__lte"] = criteria.max_price

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        products = query.limit(None).all().items

        if criteria.search:
            products = [p for p in products if _matches_text(p, criteria.search)]

        products = self._sorted(products, criteria.sort or "newest")

        total = len(products)
        start = (criteria.page - 1) * criteria.limit
        return ProductPage(
            items=products[start : start + criteria.limit],
            total=total,
            page=criteria.page,
            pages=math.ceil(total / criteria.limit) if criteria.limit else 0,
        )

    def remove(self, product: Product) -> None:
        self._dao.delete(product)

    @staticmethod
    def _sorted(products: list[Product], sort: str) -> list[Product]:
        key, reverse = _SORT_KEYS.get(sort, _SORT_KEYS["newest"])
        return sorted(products, key=key, reverse=reverse)
