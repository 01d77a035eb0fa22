"""
Trust Boundary Middleware

Every request entering the gateway is either forwarded as public,
forwarded as an authenticated user with internal identity headers, or
rejected. Client-supplied identity headers never pass through.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple
from urllib.parse import quote

from fastapi import Request

from ..auth.interfaces import AccessClaims, CredentialSigner
from ..errors import GatewayErrorCode, error_response
from .public_paths import PublicRouteMatcher

logger = logging.getLogger(__name__)

RawHeaders = List[Tuple[bytes, bytes]]

HEADER_TRUSTED = "X-Gateway-Trusted"
HEADER_CLIENT_TYPE = "X-Client-Type"
HEADER_USER_ID = "X-User-Id"
HEADER_USER_NICKNAME = "X-User-Nickname"
HEADER_USER_ROLES = "X-User-Roles"

INTERNAL_HEADERS = frozenset(
    h.lower().encode("latin-1")
    for h in (HEADER_TRUSTED, HEADER_CLIENT_TYPE, HEADER_USER_ID, HEADER_USER_NICKNAME, HEADER_USER_ROLES)
)
AUTHORIZATION = b"authorization"
COOKIE = b"cookie"

CLIENT_PUBLIC = "public"
CLIENT_USER = "user"
UNKNOWN_NICKNAME = "Unknown"


class Outcome:
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    REJECTED = "rejected"
    MALFORMED = "malformed"


@dataclass
class FilterDecision:
    """Result of evaluating one request at the boundary."""
    outcome: str
    headers: RawHeaders
    claims: Optional[AccessClaims] = None
    reason: Optional[str] = None


def _header(name: str, value: str) -> Tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


def is_canonical_path(path: str) -> bool:
    """
    True when a path has no dot segments, empty inner segments or backslashes.

    Public route matching and downstream forwarding must see the same path;
    anything a URL library would rewrite is refused instead.
    """
    if not path.startswith("/") or "\\" in path:
        return False
    segments = path.split("/")[1:]
    for i, segment in enumerate(segments):
        if segment in (".", ".."):
            return False
        if segment == "" and i != len(segments) - 1:
            return False
    return True


def _without_cookie(cookie_header: bytes, name: str) -> bytes:
    kept = []
    for part in cookie_header.decode("latin-1").split(";"):
        key = part.split("=", 1)[0].strip()
        if part.strip() and key != name:
            kept.append(part.strip())
    return "; ".join(kept).encode("latin-1")


class TrustBoundaryMiddleware:
    """
    Ingress filter turning access tokens into internal trust headers.

    Used with `app.middleware("http")`; the decision itself is available
    through `decide()` without a running application.
    """

    def __init__(
        self,
        signer: CredentialSigner,
        public_routes: PublicRouteMatcher,
        credential_carrier: str = "header",
        access_cookie_name: str = "access_token",
    ):
        """
        Initialize the trust boundary.

        Args:
            signer: Verifies access tokens
            public_routes: Matcher for routes that need no credential
            credential_carrier: "header" for Authorization: Bearer, "cookie" for a named cookie
            access_cookie_name: Cookie holding the access token when the carrier is "cookie"
        """
        self.signer = signer
        self.public_routes = public_routes
        self.credential_carrier = credential_carrier
        self.access_cookie_name = access_cookie_name

    def extract_token(self, headers: RawHeaders) -> Optional[str]:
        """Read the access token from the configured carrier."""
        if self.credential_carrier == "cookie":
            for name, value in headers:
                if name.lower() != COOKIE:
                    continue
                for part in value.decode("latin-1").split(";"):
                    key, _, token = part.strip().partition("=")
                    if key == self.access_cookie_name and token:
                        return token
            return None

        for name, value in headers:
            if name.lower() == AUTHORIZATION:
                scheme, _, token = value.decode("latin-1").strip().partition(" ")
                if scheme.lower() == "bearer" and token.strip():
                    return token.strip()
                return None
        return None

    def _strip(self, headers: RawHeaders) -> RawHeaders:
        stripped = []
        for name, value in headers:
            lowered = name.lower()
            if lowered in INTERNAL_HEADERS or lowered == AUTHORIZATION:
                continue
            if lowered == COOKIE and self.credential_carrier == "cookie":
                value = _without_cookie(value, self.access_cookie_name)
                if not value:
                    continue
            stripped.append((name, value))
        return stripped

    def decide(self, method: str, path: str, headers: RawHeaders) -> FilterDecision:
        """
        Evaluate a request.

        Args:
            method: HTTP method
            path: Request path
            headers: Raw ASGI headers as received

        Returns:
            FilterDecision with the headers to forward
        """
        if not is_canonical_path(path):
            return FilterDecision(Outcome.MALFORMED, [], reason="non-canonical path")

        forwarded = self._strip(headers)

        if self.public_routes.is_public(path, method):
            forwarded.append(_header(HEADER_TRUSTED, "true"))
            forwarded.append(_header(HEADER_CLIENT_TYPE, CLIENT_PUBLIC))
            return FilterDecision(Outcome.PUBLIC, forwarded)

        token = self.extract_token(headers)
        if not token:
            return FilterDecision(Outcome.REJECTED, [], reason="missing credential")

        claims = self.signer.verify(token)
        if claims is None:
            return FilterDecision(Outcome.REJECTED, [], reason="invalid credential")

        nickname = claims.display_name or UNKNOWN_NICKNAME
        forwarded.append(_header(HEADER_TRUSTED, "true"))
        forwarded.append(_header(HEADER_CLIENT_TYPE, CLIENT_USER))
        forwarded.append(_header(HEADER_USER_ID, quote(claims.subject, safe="")))
        forwarded.append(_header(HEADER_USER_NICKNAME, quote(nickname, safe="")))
        forwarded.append(_header(HEADER_USER_ROLES, ",".join(quote(r, safe="") for r in claims.roles)))
        return FilterDecision(Outcome.AUTHENTICATED, forwarded, claims=claims)

    async def __call__(self, request: Request, call_next):
        """Process the request through the trust boundary."""
        decision = self.decide(request.method, request.url.path, list(request.scope["headers"]))

        if decision.outcome == Outcome.REJECTED:
            logger.warning(f"Rejected {request.method} {request.url.path}: {decision.reason}")
            return error_response(GatewayErrorCode.UNAUTHORIZED)
        if decision.outcome == Outcome.MALFORMED:
            logger.warning(f"Refused {request.method} {request.url.path!r}: {decision.reason}")
            return error_response(GatewayErrorCode.REQUEST_BIND_ERROR)

        request.scope["headers"] = decision.headers
        request.state.client_type = CLIENT_USER if decision.claims else CLIENT_PUBLIC
        request.state.claims = decision.claims
        if decision.claims:
            logger.debug(f"Authenticated subject {decision.claims.subject} for {request.url.path}")
        return await call_next(request)
