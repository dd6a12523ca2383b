"""Domain events for the User aggregate."""

from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A new account was created."""

    user_id = Identifier(required=True)
    email = String(required=True, max_length=254)
    role = String(required=True, max_length=20)


@storefront.event(part_of="User")
class UserBecameVendor:
    """An account set up a vendor profile and may now list products."""

    user_id = Identifier(required=True)
    business_name = String(max_length=255)
