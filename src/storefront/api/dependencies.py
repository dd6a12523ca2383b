"""Request dependencies shared by the routers."""

from fastapi import Header

from storefront.identity.authentication import resolve_bearer
from storefront.identity.user import User


async def current_user(authorization: str | None = Header(default=None)) -> User:
    """The authenticated caller. Missing or invalid tokens raise a 401."""
    return resolve_bearer(authorization)
