"""Credential checks and bearer-token resolution."""

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.identity.passwords import verify_password
from storefront.identity.tokens import get_token_service
from storefront.identity.user import User
from storefront.shared.exceptions import AuthenticationError

logger = structlog.get_logger(__name__)


def login(email: str, password: str) -> tuple[User, str]:
    """Return the matching user and a fresh token, or raise AuthenticationError."""
    user = current_domain.repository_for(User).find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Login rejected", email=email.strip().lower())
        raise AuthenticationError("Invalid credentials")

    return user, issue_token(user)


def issue_token(user: User) -> str:
    return get_token_service().issue(str(user.id), user.role)


def resolve_bearer(authorization: str | None) -> User:
    """Map an ``Authorization: Bearer <token>`` header to the calling user."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("No token, authorization denied")

    claims = get_token_service().verify(token.strip())
    if claims is None:
        raise AuthenticationError("Token is not valid")

    try:
        return current_domain.repository_for(User).get(claims.user_id)
    except ObjectNotFoundError:
        raise AuthenticationError("Token is not valid") from None
