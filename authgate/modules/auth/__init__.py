"""
Authentication Module - Black Box Interface

Purpose: Issue, rotate and revoke credential pairs; verify access tokens
Interface: AuthenticationService.login(), refresh(), logout();
           JwtCredentialSigner.issue(), verify()
Hidden: Refresh token hashing, store layout, identity resolution

The composition root lives in `factory` and is imported explicitly so this
package can be used without pulling in the storage backend.
"""

from .interfaces import AccessClaims, AuthenticatedUser, ExchangePayload, IssuedPair
from .service import AuthenticationService, DefaultAuthenticationService
from .signer import JwtCredentialSigner

__all__ = [
    "AccessClaims",
    "AuthenticatedUser",
    "ExchangePayload",
    "IssuedPair",
    "AuthenticationService",
    "DefaultAuthenticationService",
    "JwtCredentialSigner",
]
