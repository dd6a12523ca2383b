"""User aggregate root with embedded Address entities and vendor profile."""

from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, String, ValueObject

from storefront.domain import storefront
from storefront.identity.events import UserBecameVendor, UserRegistered
from storefront.shared.exceptions import NotFoundError


class UserRole(Enum):
    CUSTOMER = "customer"
    VENDOR = "vendor"
    ADMIN = "admin"


@storefront.value_object(part_of="User")
class VendorProfile:
    """Business details shown to shoppers for a vendor account."""

    business_name: String(max_length=255)
    business_address: String(max_length=500)
    business_description: String(max_length=2000)
    business_logo: String(max_length=1024)
    business_phone: String(max_length=30)
    business_email: String(max_length=254)
    is_verified: Boolean(default=False)


@storefront.value_object(part_of="User")
class NotificationPreferences:
    email: Boolean(default=True)
    push: Boolean(default=True)
    sms: Boolean(default=False)


@storefront.entity(part_of="User")
class Address:
    """A saved delivery address. At most one is the default."""

    full_name: String(required=True, max_length=255)
    street_address: String(required=True, max_length=255)
    apartment: String(max_length=100)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    zip_code: String(required=True, max_length=20)
    country: String(required=True, max_length=100, default="United States")
    phone: String(max_length=30)
    is_default: Boolean(default=False)


@storefront.aggregate
class User:
    """A registered account. Carts, orders and products refer to it by id only."""

    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=512)
    name: String(required=True, max_length=255)
    phone_number: String(max_length=30)
    role: String(choices=UserRole, default=UserRole.CUSTOMER.value)
    addresses: HasMany(Address)
    profile_image: String(max_length=1024)
    is_vendor: Boolean(default=False)
    vendor_info: ValueObject(VendorProfile)
    notification_preferences: ValueObject(NotificationPreferences)
    created_at: DateTime()

    @invariant.post
    def at_most_one_default_address(self):
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) > 1:
            raise ValidationError({"addresses": ["Only one address can be the default"]})

    @classmethod
    def register(cls, email, password_hash, name, phone_number=None, role=None):
        user = cls(
            email=email.strip().lower(),
            password_hash=password_hash,
            name=name.strip(),
            phone_number=phone_number,
            role=role or UserRole.CUSTOMER.value,
            is_vendor=role == UserRole.VENDOR.value,
            notification_preferences=NotificationPreferences(),
            created_at=datetime.now(UTC),
        )
        user.raise_(UserRegistered(user_id=str(user.id), email=user.email, role=user.role))
        return user

    def update_profile(self, name=None, phone_number=None, profile_image=None, notification_preferences=None):
        if name is not None:
            self.name = name.strip()
        if phone_number is not None:
            self.phone_number = phone_number
        if profile_image is not None:
            self.profile_image = profile_image
        if notification_preferences is not None:
            current = self.notification_preferences or NotificationPreferences()
            self.notification_preferences = NotificationPreferences(
                email=notification_preferences.get("email", current.email),
                push=notification_preferences.get("push", current.push),
                sms=notification_preferences.get("sms", current.sms),
            )

    def add_address(self, make_default=False, **address_data) -> Address:
        """Add an address. The first address, or one flagged default, becomes the default."""
        make_default = make_default or not self.addresses
        if make_default:
            for existing in self.addresses:
                existing.is_default = False

        address = Address(is_default=make_default, **address_data)
        self.add_addresses(address)
        return address

    def remove_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise NotFoundError("Address not found")

        was_default = address.is_default
        self.remove_addresses(address)
        if was_default and self.addresses:
            self.addresses[0].is_default = True

    @property
    def default_address(self) -> Address | None:
        return next((a for a in self.addresses if a.is_default), None)

    def become_vendor(self, **vendor_data):
        current = self.vendor_info
        self.vendor_info = VendorProfile(
            is_verified=current.is_verified if current else False,
            **vendor_data,
        )
        if self.role != UserRole.ADMIN.value:
            self.role = UserRole.VENDOR.value
        self.is_vendor = True
        self.raise_(UserBecameVendor(user_id=str(self.id), business_name=vendor_data.get("business_name")))
