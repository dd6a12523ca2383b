"""User registration: command and handler."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.passwords import hash_password
from storefront.identity.user import User, UserRole

logger = structlog.get_logger(__name__)


@storefront.command(part_of="User")
class RegisterUser:
    """Create an account. The plain password never leaves the handler."""

    email = String(required=True, max_length=254)
    password = String(required=True, max_length=128)
    name = String(required=True, max_length=255)
    phone_number = String(max_length=30)
    role = String(max_length=20)


@storefront.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        if repo.find_by_email(command.email) is not None:
            raise ValidationError({"email": ["Email is already registered"]})
        if command.role not in (None, UserRole.CUSTOMER.value, UserRole.VENDOR.value):
            raise ValidationError({"role": ["Role must be customer or vendor"]})

        user = User.register(
            email=command.email,
            password_hash=hash_password(command.password),
            name=command.name,
            phone_number=command.phone_number,
            role=command.role,
        )
        repo.add(user)
        logger.info("User registered", user_id=str(user.id), role=user.role)
        return str(user.id)
