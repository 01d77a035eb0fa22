"""Refresh token generation and hashing."""

import base64
import hashlib
import hmac
import secrets

from .signer import derive_key


def generate_refresh_token() -> str:
    """Generate an opaque refresh token with 256 bits of entropy."""
    return secrets.token_urlsafe(32)


class HmacRefreshTokenHasher:
    """HMAC-SHA256 digest of a raw refresh token, base64url without padding."""

    def __init__(self, secret: str):
        self._key = derive_key(secret, "Refresh token secret")

    def hash(self, raw_token: str) -> str:
        digest = hmac.new(self._key, raw_token.encode("utf-8"), hashlib.sha256).digest()
        return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")
