"""
HS256 access token signer.

The signing key is derived once from the configured secret and never
changes for the lifetime of the process.
"""

import logging
import time
from typing import Callable, List, Optional

import jwt

from ..errors import ConfigurationError
from .interfaces import AccessClaims, IssuedAccessToken

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_SECRET_BYTES = 32


def derive_key(secret: Optional[str], name: str = "secret") -> bytes:
    """
    Turn a configured secret into HMAC key material.

    Args:
        secret: Secret text from configuration
        name: Name used in the error message

    Returns:
        UTF-8 bytes of the secret

    Raises:
        ConfigurationError: If the secret is blank or shorter than 256 bits
    """
    if secret is None or not secret.strip():
        raise ConfigurationError(f"{name} must not be blank")
    key = secret.encode("utf-8")
    if len(key) < MIN_SECRET_BYTES:
        raise ConfigurationError(
            f"{name} must be at least {MIN_SECRET_BYTES} bytes, got {len(key)}"
        )
    return key


class JwtCredentialSigner:
    """Issues and verifies short-lived access tokens."""

    def __init__(
        self,
        secret: str,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ):
        if ttl_seconds <= 0:
            raise ConfigurationError(f"Access token TTL must be positive, got {ttl_seconds}")
        self._key = derive_key(secret, "Access token secret")
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def issue(self, subject_id: str, display_name: Optional[str], roles: List[str]) -> IssuedAccessToken:
        now = int(self._clock())
        claims = {
            "sub": str(subject_id),
            "name": display_name,
            "roles": list(roles),
            "iat": now,
            "exp": now + self.ttl_seconds,
        }
        token = jwt.encode(claims, self._key, algorithm=ALGORITHM)
        return IssuedAccessToken(token=token, expires_in_seconds=self.ttl_seconds)

    def verify(self, token: str) -> Optional[AccessClaims]:
        """
        Verify signature, expiry and required claims.

        Returns:
            AccessClaims when valid, None otherwise
        """
        if not token:
            return None
        try:
            claims = jwt.decode(
                token,
                self._key,
                algorithms=[ALGORITHM],
                options={
                    "verify_signature": True,
                    "verify_exp": True,
                    "require": ["exp", "iat", "sub"],
                },
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Access token expired")
            return None
        except jwt.InvalidSignatureError:
            logger.debug("Access token signature mismatch")
            return None
        except jwt.InvalidTokenError as e:
            logger.debug(f"Invalid access token: {e}")
            return None

        roles = claims.get("roles") or []
        if not isinstance(roles, list):
            logger.debug("Access token roles claim is not a list")
            return None
        return AccessClaims(
            subject=str(claims["sub"]),
            display_name=claims.get("name"),
            roles=[str(r) for r in roles],
            issued_at=int(claims["iat"]),
            expires_at=int(claims["exp"]),
        )
