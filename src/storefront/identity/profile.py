"""Profile, address book and vendor profile: commands and handler."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.shared.exceptions import NotFoundError


@storefront.command(part_of="User")
class UpdateProfile:
    user_id = Identifier(required=True)
    name = String(max_length=255)
    phone_number = String(max_length=30)
    profile_image = String(max_length=1024)
    notification_preferences = Text()  # JSON object: {email, push, sms}


@storefront.command(part_of="User")
class AddAddress:
    user_id = Identifier(required=True)
    full_name = String(required=True, max_length=255)
    street_address = String(required=True, max_length=255)
    apartment = String(max_length=100)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    zip_code = String(required=True, max_length=20)
    country = String(max_length=100)
    phone = String(max_length=30)
    is_default = Boolean(default=False)


@storefront.command(part_of="User")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command(part_of="User")
class BecomeVendor:
    user_id = Identifier(required=True)
    business_name = String(required=True, max_length=255)
    business_address = String(max_length=500)
    business_description = String(max_length=2000)
    business_logo = String(max_length=1024)
    business_phone = String(max_length=30)
    business_email = String(max_length=254)


def load_user(user_id) -> User:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        raise NotFoundError("User not found") from None


@storefront.command_handler(part_of=User)
class ManageProfileHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        user = load_user(command.user_id)
        preferences = json.loads(command.notification_preferences) if command.notification_preferences else None
        user.update_profile(
            name=command.name,
            phone_number=command.phone_number,
            profile_image=command.profile_image,
            notification_preferences=preferences,
        )
        current_domain.repository_for(User).add(user)

    @handle(AddAddress)
    def add_address(self, command):
        user = load_user(command.user_id)
        address = user.add_address(
            make_default=bool(command.is_default),
            full_name=command.full_name,
            street_address=command.street_address,
            apartment=command.apartment,
            city=command.city,
            state=command.state,
            zip_code=command.zip_code,
            country=command.country or "United States",
            phone=command.phone,
        )
        current_domain.repository_for(User).add(user)
        return str(address.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        user = load_user(command.user_id)
        user.remove_address(command.address_id)
        current_domain.repository_for(User).add(user)

    @handle(BecomeVendor)
    def become_vendor(self, command):
        user = load_user(command.user_id)
        user.become_vendor(
            business_name=command.business_name,
            business_address=command.business_address,
            business_description=command.business_description,
            business_logo=command.business_logo,
            business_phone=command.business_phone,
            business_email=command.business_email,
        )
        current_domain.repository_for(User).add(user)
