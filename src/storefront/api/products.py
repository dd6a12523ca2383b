"""FastAPI endpoints for the product catalogue.

Reads are public. Mutations require a token, and only the product's vendor
may update or delete it.
"""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_user
from storefront.api.schemas import (
    CreateProductRequest,
    MessageResponse,
    PaginationSchema,
    ProductListResponse,
    ProductResponse,
    UpdateProductRequest,
)
from storefront.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct, load_product
from storefront.catalogue.product import Product
from storefront.catalogue.repository import ProductSearch
from storefront.identity.user import User

product_router = APIRouter(prefix="/products", tags=["products"])


@product_router.get("", response_model=ProductListResponse)
async def list_products(
    category: str | None = None,
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    in_stock: bool | None = None,
    featured: bool | None = None,
    search: str | None = None,
    sort: str | None = None,
    limit: int = Query(default=10, ge=1, le=100),
    page: int = Query(default=1, ge=1),
) -> ProductListResponse:
    criteria = ProductSearch(
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        featured=featured,
        search=search,
        sort=sort,
        limit=limit,
        page=page,
    )
    result = current_domain.repository_for(Product).search(criteria)
    return ProductListResponse(
        products=[ProductResponse.from_product(p) for p in result.items],
        pagination=PaginationSchema(total=result.total, page=result.page, pages=result.pages),
    )


@product_router.get("/featured/list", response_model=list[ProductResponse])
async def featured_products(limit: int = Query(default=5, ge=1, le=50)) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).find_featured(limit=limit)
    return [ProductResponse.from_product(p) for p in products]


@product_router.get("/vendor/{vendor_id}", response_model=list[ProductResponse])
async def vendor_products(vendor_id: str) -> list[ProductResponse]:
    products = current_domain.repository_for(Product).find_by_vendor(vendor_id)
    return [ProductResponse.from_product(p) for p in products]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return ProductResponse.from_product(load_product(product_id))


@product_router.post("", status_code=201, response_model=ProductResponse)
async def create_product(body: CreateProductRequest, user: User = Depends(current_user)) -> ProductResponse:
    command = CreateProduct(
        vendor_id=str(user.id),
        name=body.name,
        description=body.description,
        price=body.price,
        category=body.category,
        image=body.image,
        in_stock=body.in_stock,
        stock_quantity=body.stock_quantity,
        tags=json.dumps(body.tags),
        featured=body.featured,
        discount_percentage=body.discount_percentage,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(load_product(product_id))


@product_router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str, body: UpdateProductRequest, user: User = Depends(current_user)
) -> ProductResponse:
    changes = body.model_dump(exclude_none=True)
    if "tags" in changes:
        changes["tags"] = json.dumps(changes["tags"])

    command = UpdateProduct(product_id=product_id, requested_by=str(user.id), **changes)
    current_domain.process(command, asynchronous=False)
    return ProductResponse.from_product(load_product(product_id))


@product_router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(product_id: str, user: User = Depends(current_user)) -> MessageResponse:
    command = DeleteProduct(product_id=product_id, requested_by=str(user.id))
    current_domain.process(command, asynchronous=False)
    return MessageResponse(message="Product removed")
