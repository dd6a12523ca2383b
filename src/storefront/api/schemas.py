"""Pydantic request/response schemas for the Storefront API.

These are external contracts, kept separate from the internal Protean
commands and aggregates. Responses expose ``id`` and never the password
hash or internal version fields.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from storefront.shared.money import round_money

OrderStatusLiteral = Literal["Processing", "In Transit", "Delivered", "Cancelled"]
PaymentMethodLiteral = Literal["Credit Card", "PayPal", "Cash On Delivery"]
CategoryLiteral = Literal["Food", "Groceries", "Pharmacy", "Electronics", "Clothing", "Other"]


# ---------------------------------------------------------------------------
# Shared
# ---------------------------------------------------------------------------
class MessageResponse(BaseModel):
    message: str


class AddressSchema(BaseModel):
    full_name: str = Field(min_length=1)
    street_address: str = Field(min_length=1)
    apartment: str | None = None
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = "United States"
    phone: str | None = None


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
class RegisterRequest(BaseModel):
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)
    phone_number: str | None = None
    role: Literal["customer", "vendor"] | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "email": "jane@example.com",
                    "password": "s3cret-pass",
                    "name": "Jane Doe",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class NotificationPreferencesSchema(BaseModel):
    email: bool = True
    push: bool = True
    sms: bool = False


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    phone_number: str | None = None
    profile_image: str | None = None
    notification_preferences: dict[str, bool] | None = None


class AddAddressRequest(AddressSchema):
    is_default: bool = False


class VendorProfileRequest(BaseModel):
    business_name: str = Field(min_length=1)
    business_address: str | None = None
    business_description: str | None = None
    business_logo: str | None = None
    business_phone: str | None = None
    business_email: str | None = None


class AddressResponse(AddressSchema):
    id: str
    is_default: bool = False


class VendorProfileResponse(BaseModel):
    business_name: str | None = None
    business_address: str | None = None
    business_description: str | None = None
    business_logo: str | None = None
    business_phone: str | None = None
    business_email: str | None = None
    is_verified: bool = False


class UserResponse(BaseModel):
    id: str
    email: str
    name: str
    phone_number: str | None = None
    role: str
    addresses: list[AddressResponse] = []
    profile_image: str | None = None
    is_vendor: bool = False
    vendor_info: VendorProfileResponse | None = None
    notification_preferences: NotificationPreferencesSchema | None = None
    created_at: datetime | None = None

    @classmethod
    def from_user(cls, user) -> "UserResponse":
        vendor = user.vendor_info
        prefs = user.notification_preferences
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            phone_number=user.phone_number,
            role=user.role,
            addresses=[
                AddressResponse(
                    id=str(a.id),
                    full_name=a.full_name,
                    street_address=a.street_address,
                    apartment=a.apartment,
                    city=a.city,
                    state=a.state,
                    zip_code=a.zip_code,
                    country=a.country or "United States",
                    phone=a.phone,
                    is_default=bool(a.is_default),
                )
                for a in user.addresses
            ],
            profile_image=user.profile_image,
            is_vendor=bool(user.is_vendor),
            vendor_info=VendorProfileResponse(
                business_name=vendor.business_name,
                business_address=vendor.business_address,
                business_description=vendor.business_description,
                business_logo=vendor.business_logo,
                business_phone=vendor.business_phone,
                business_email=vendor.business_email,
                is_verified=bool(vendor.is_verified),
            )
            if vendor
            else None,
            notification_preferences=NotificationPreferencesSchema(
                email=prefs.email,
                push=prefs.push,
                sms=prefs.sms,
            )
            if prefs
            else None,
            created_at=user.created_at,
        )


class AuthResponse(BaseModel):
    token: str
    user: UserResponse


# ---------------------------------------------------------------------------
# Products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    price: float = Field(ge=0)
    category: CategoryLiteral
    image: str | None = None
    in_stock: bool | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    tags: list[str] = []
    featured: bool | None = None
    discount_percentage: float | None = Field(default=None, ge=0, le=100)


class UpdateProductRequest(BaseModel):
    """Only these fields can change. Unknown fields are rejected."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    category: CategoryLiteral | None = None
    image: str | None = None
    in_stock: bool | None = None
    stock_quantity: int | None = Field(default=None, ge=0)
    tags: list[str] | None = None
    featured: bool | None = None
    discount_percentage: float | None = Field(default=None, ge=0, le=100)

    model_config = {"extra": "forbid"}


class ProductResponse(BaseModel):
    id: str
    name: str
    description: str
    price: float
    discounted_price: float
    category: str
    image: str | None = None
    in_stock: bool
    stock_quantity: int
    tags: list[str] = []
    vendor_id: str
    rating: float = 0.0
    num_reviews: int = 0
    featured: bool = False
    discount_percentage: float = 0.0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> "ProductResponse":
        return cls(
            id=str(product.id),
            name=product.name,
            description=product.description,
            price=product.price,
            discounted_price=round_money(product.discounted_price),
            category=product.category,
            image=product.image,
            in_stock=bool(product.in_stock),
            stock_quantity=product.stock_quantity or 0,
            tags=product.tag_list,
            vendor_id=str(product.vendor_id),
            rating=product.rating or 0.0,
            num_reviews=product.num_reviews or 0,
            featured=bool(product.featured),
            discount_percentage=product.discount_percentage or 0.0,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )


class PaginationSchema(BaseModel):
    total: int
    page: int
    pages: int


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    pagination: PaginationSchema


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str = Field(min_length=1)
    quantity: int = Field(ge=1, default=1)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(ge=0)


class ApplyCouponRequest(BaseModel):
    coupon_code: str = Field(min_length=1)


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    name: str
    price: float
    discounted_price: float
    quantity: int
    image: str | None = None


class CartResponse(BaseModel):
    id: str
    user_id: str
    items: list[CartItemResponse] = []
    subtotal: float = 0.0
    tax: float = 0.0
    shipping_cost: float = 0.0
    total: float = 0.0
    coupon_code: str | None = None
    coupon_discount: float = 0.0
    updated_at: datetime | None = None

    @classmethod
    def from_cart(cls, cart) -> "CartResponse":
        return cls(
            id=str(cart.id),
            user_id=str(cart.user_id),
            items=[
                CartItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    price=item.price,
                    discounted_price=item.discounted_price,
                    quantity=item.quantity,
                    image=item.image,
                )
                for item in cart.line_items
            ],
            subtotal=cart.subtotal or 0.0,
            tax=cart.tax or 0.0,
            shipping_cost=cart.shipping_cost or 0.0,
            total=cart.total or 0.0,
            coupon_code=cart.coupon_code,
            coupon_discount=cart.coupon_discount or 0.0,
            updated_at=cart.updated_at,
        )


class CheckoutItemSchema(BaseModel):
    product_id: str
    name: str
    price: float
    discounted_price: float
    quantity: int
    image: str | None = None


class CheckoutSummary(BaseModel):
    cart_id: str
    items: list[CheckoutItemSchema]
    subtotal: float
    tax: float
    shipping_cost: float
    coupon_discount: float
    total: float
    timestamp: datetime


class CheckoutResponse(BaseModel):
    message: str = "Checkout successful"
    order: CheckoutSummary


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class OrderItemSchema(BaseModel):
    product_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    description: str | None = None
    quantity: int = Field(ge=1)
    price: float = Field(ge=0)
    image: str | None = None


class CreateOrderRequest(BaseModel):
    items: list[OrderItemSchema] = Field(min_length=1)
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    payment_method: PaymentMethodLiteral
    subtotal: float = Field(ge=0)
    shipping_cost: float = Field(ge=0, default=0.0)
    tax: float = Field(ge=0, default=0.0)
    total: float = Field(ge=0)
    notes: str | None = None


class UpdateOrderStatusRequest(BaseModel):
    status: OrderStatusLiteral


class UpdateTrackingRequest(BaseModel):
    tracking_number: str = Field(min_length=1)
    estimated_delivery_date: datetime | None = None


class OrderItemResponse(OrderItemSchema):
    id: str


class OrderResponse(BaseModel):
    id: str
    user_id: str
    items: list[OrderItemResponse]
    shipping_address: AddressSchema | None = None
    billing_address: AddressSchema | None = None
    status: str
    payment_method: str
    payment_status: str
    subtotal: float
    shipping_cost: float
    tax: float
    total: float
    tracking_number: str | None = None
    estimated_delivery_date: datetime | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @staticmethod
    def _address(address) -> AddressSchema | None:
        if address is None:
            return None
        return AddressSchema(
            full_name=address.full_name,
            street_address=address.street_address,
            apartment=address.apartment,
            city=address.city,
            state=address.state,
            zip_code=address.zip_code,
            country=address.country or "United States",
            phone=address.phone,
        )

    @classmethod
    def from_order(cls, order) -> "OrderResponse":
        return cls(
            id=str(order.id),
            user_id=str(order.user_id),
            items=[
                OrderItemResponse(
                    id=str(item.id),
                    product_id=str(item.product_id),
                    name=item.name,
                    description=item.description,
                    quantity=item.quantity,
                    price=item.price,
                    image=item.image,
                )
                for item in order.line_items
            ],
            shipping_address=cls._address(order.shipping_address),
            billing_address=cls._address(order.billing_address),
            status=order.status,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            subtotal=order.subtotal,
            shipping_cost=order.shipping_cost or 0.0,
            tax=order.tax or 0.0,
            total=order.total,
            tracking_number=order.tracking_number,
            estimated_delivery_date=order.estimated_delivery_date,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )
