"""
Authentication interfaces following Black Box Design principles.

Each protocol names one capability the token lifecycle depends on, so
stores and collaborators can be replaced without touching the lifecycle.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field


class ExchangePayload(BaseModel):
    """Identity facts captured when the identity provider reports success."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    provider: str
    provider_subject_id: str = Field(alias="providerUserId")
    display_name: Optional[str] = Field(default=None, alias="nickname")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Internal user resolved from the user-profile service."""
    subject_id: str
    display_name: Optional[str]
    roles: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class AccessClaims:
    """Verified contents of an access token."""
    subject: str
    display_name: Optional[str]
    roles: List[str]
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class IssuedAccessToken:
    token: str
    expires_in_seconds: int


@dataclass(frozen=True)
class IssuedPair:
    """Access token plus the raw refresh token handed to the client once."""
    access_token: str
    refresh_token: str
    access_expires_in: int
    refresh_expires_in: int
    token_type: str = "Bearer"


class CredentialSigner(Protocol):
    """Protocol for access token signing and verification."""

    def issue(self, subject_id: str, display_name: Optional[str], roles: List[str]) -> IssuedAccessToken:
        ...

    def verify(self, token: str) -> Optional[AccessClaims]:
        ...


class RefreshTokenHasher(Protocol):
    """Protocol for the deterministic refresh token digest."""

    def hash(self, raw_token: str) -> str:
        ...


class ExchangeCodeStore(Protocol):
    """Protocol for one-time exchange code storage."""

    async def save(self, code: str, payload: ExchangePayload, ttl_seconds: int) -> bool:
        ...

    async def consume(self, code: str) -> Optional[ExchangePayload]:
        ...


class RefreshTokenStore(Protocol):
    """Protocol for hashed refresh token storage."""

    async def save(self, hashed: str, subject_id: str, ttl_seconds: int) -> bool:
        ...

    async def delete(self, hashed: str) -> bool:
        ...

    async def rotate(self, old_hashed: str, new_hashed: str, ttl_seconds: int) -> Optional[str]:
        """Atomically move ownership from old to new; None if old is gone."""
        ...


class SubjectLoader(Protocol):
    """Protocol for re-loading a subject during refresh."""

    async def load(self, subject_id: str) -> AuthenticatedUser:
        ...
