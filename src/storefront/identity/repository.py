"""Repository for the User aggregate."""

from storefront.domain import storefront
from storefront.identity.user import User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        """Look up an account by its normalised email address."""
        return self._dao.query.filter(email=email.strip().lower()).all().first
