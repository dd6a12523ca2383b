"""Storefront errors and the HTTP status each one maps to.

Field-level validation failures use ``protean.exceptions.ValidationError``;
the classes here cover lookups, ownership and rejected business requests.
"""


class StorefrontError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ItemNotFoundError(NotFoundError):
    default_message = "Item not found in cart"


class AuthorizationError(StorefrontError):
    """The caller is authenticated but does not own the resource."""

    status_code = 403
    default_message = "Unauthorized"


class AuthenticationError(StorefrontError):
    status_code = 401
    default_message = "Authentication required"


class BusinessRuleError(StorefrontError):
    """A well-formed request that the current state of the aggregate refuses."""

    status_code = 400
    default_message = "Request cannot be fulfilled"


class InvalidTransitionError(BusinessRuleError):
    default_message = "Invalid status transition"


class InvalidCouponError(BusinessRuleError):
    default_message = "Invalid coupon code"


class OutOfStockError(BusinessRuleError):
    default_message = "Product is out of stock or has insufficient quantity"


class EmptyCartError(BusinessRuleError):
    default_message = "Cart is empty"
