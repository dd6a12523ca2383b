"""Token service factory.

Provides get_token_service() / set_token_service() to swap implementations.
The default signs tokens with ``STOREFRONT_SECRET_KEY``.
"""

import os

from storefront.identity.tokens.hmac_adapter import HmacTokenService
from storefront.identity.tokens.port import TokenClaims, TokenService

_current_service: TokenService | None = None

__all__ = ["TokenClaims", "TokenService", "get_token_service", "set_token_service", "reset_token_service"]


def get_token_service() -> TokenService:
    """Return the active token service, building the HMAC default on first use."""
    global _current_service
    if _current_service is None:
        _current_service = HmacTokenService(
            secret_key=os.environ.get("STOREFRONT_SECRET_KEY", "storefront-dev-secret"),
            ttl_seconds=int(os.environ.get("STOREFRONT_TOKEN_TTL", "86400")),
        )
    return _current_service


def set_token_service(service: TokenService) -> None:
    """Override the active token service (useful for tests)."""
    global _current_service
    _current_service = service


def reset_token_service() -> None:
    global _current_service
    _current_service = None
