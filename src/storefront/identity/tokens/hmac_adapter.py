"""HMAC-SHA256 signed bearer tokens.

Format: ``base64url(json claims) + "." + hex signature``.
"""

import base64
import hashlib
import hmac
import json
import time

from storefront.identity.tokens.port import TokenClaims, TokenService


def _b64encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode()


def _b64decode(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "=" * (-len(data) % 4))


class HmacTokenService(TokenService):
    def __init__(self, secret_key: str, ttl_seconds: int = 86400, clock=time.time) -> None:
        self.secret_key = secret_key.encode()
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _sign(self, payload: str) -> str:
        return hmac.new(self.secret_key, payload.encode(), hashlib.sha256).hexdigest()

    def issue(self, user_id: str, role: str) -> str:
        claims = {"sub": str(user_id), "role": role, "exp": int(self._clock()) + self.ttl_seconds}
        payload = _b64encode(json.dumps(claims, separators=(",", ":")).encode())
        return f"{payload}.{self._sign(payload)}"

    def verify(self, token: str) -> TokenClaims | None:
        payload, _, signature = token.partition(".")
        if not payload or not signature:
            return None
        if not hmac.compare_digest(self._sign(payload), signature):
            return None

        try:
            claims = json.loads(_b64decode(payload))
        except ValueError:
            return None

        if claims.get("exp", 0) < self._clock():
            return None
        return TokenClaims(user_id=claims["sub"], role=claims.get("role", "customer"), expires_at=claims["exp"])
