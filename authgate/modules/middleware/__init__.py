"""
Trust Boundary Middleware Module - Black Box Interface

Purpose: Authenticate ingress traffic and attach internal identity headers
Interface: create_trust_boundary_middleware(), create_device_id_middleware(),
           each returning a FastAPI http middleware
Hidden: Credential extraction, header stripping, public route matching, device cookie issuance
"""

import logging

from ...config.provider import GatewayConfig
from ..auth.interfaces import CredentialSigner
from .device_id import DeviceIdCookieMiddleware
from .public_paths import PublicRouteMatcher, compile_pattern
from .trust_boundary import FilterDecision, Outcome, TrustBoundaryMiddleware

logger = logging.getLogger(__name__)


def create_trust_boundary_middleware(
    signer: CredentialSigner,
    config: GatewayConfig,
) -> TrustBoundaryMiddleware:
    """
    Factory function to create the trust boundary middleware.

    Args:
        signer: Access token verifier
        config: Gateway configuration (public paths, credential carrier)

    Returns:
        Configured TrustBoundaryMiddleware instance
    """
    logger.info(
        f"Trust boundary using {config.credential_carrier} credentials, "
        f"public paths {config.public_paths}"
    )
    return TrustBoundaryMiddleware(
        signer=signer,
        public_routes=PublicRouteMatcher(config.public_paths),
        credential_carrier=config.credential_carrier,
        access_cookie_name=config.access_cookie_name,
    )


def create_device_id_middleware(config: GatewayConfig, secure: bool = True) -> DeviceIdCookieMiddleware:
    """
    Factory function to create the device id cookie middleware.

    Args:
        config: Gateway configuration (device cookie name)
        secure: Whether the cookie carries the Secure flag

    Returns:
        Configured DeviceIdCookieMiddleware instance
    """
    return DeviceIdCookieMiddleware(cookie_name=config.device_cookie_name, secure=secure)


__all__ = [
    "create_device_id_middleware",
    "DeviceIdCookieMiddleware",
    "create_trust_boundary_middleware",
    "TrustBoundaryMiddleware",
    "FilterDecision",
    "Outcome",
    "PublicRouteMatcher",
    "compile_pattern",
]
