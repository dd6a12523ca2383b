"""Bearer token service port (abstract interface).

Routers depend on this contract only, so the signed-token adapter used in
development and tests can be replaced by an external identity provider.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified bearer token."""

    user_id: str
    role: str
    expires_at: int


class TokenService(ABC):
    @abstractmethod
    def issue(self, user_id: str, role: str) -> str:
        """Return a bearer token for the given user."""
        ...

    @abstractmethod
    def verify(self, token: str) -> TokenClaims | None:
        """Return the claims of a valid, unexpired token, or None."""
        ...
