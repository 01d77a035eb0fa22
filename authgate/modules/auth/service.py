"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- The three client-facing flows: login with an exchange code, refresh, logout
- A protocol so the API layer depends on the flows, not on the stores
"""

import logging
from typing import Optional, Protocol

from ..errors import BadRequestError, UnauthorizedError
from .identity import UserIdentityService
from .interfaces import ExchangeCodeStore, IssuedPair
from .lifecycle import TokenLifecycleManager

logger = logging.getLogger(__name__)


class AuthenticationService(Protocol):
    """Protocol for authentication services."""

    async def login(self, exchange_code: str) -> IssuedPair:
        """
        Redeem a one-time exchange code.

        Args:
            exchange_code: Code delivered to the front end after IdP sign-in

        Returns:
            A fresh credential pair
        """
        ...

    async def refresh(self, refresh_token: Optional[str]) -> IssuedPair:
        ...

    async def logout(self, refresh_token: Optional[str]) -> None:
        ...


class DefaultAuthenticationService:
    """
    Default implementation of AuthenticationService.

    Wires the exchange store, identity resolution and token lifecycle
    into the login, refresh and logout flows.
    """

    def __init__(
        self,
        exchange_store: ExchangeCodeStore,
        identity: UserIdentityService,
        lifecycle: TokenLifecycleManager,
    ):
        self.exchange_store = exchange_store
        self.identity = identity
        self.lifecycle = lifecycle

    async def login(self, exchange_code: str) -> IssuedPair:
        if not exchange_code or not exchange_code.strip():
            raise BadRequestError("Exchange code must not be blank")

        payload = await self.exchange_store.consume(exchange_code.strip())
        if payload is None:
            raise UnauthorizedError("Exchange code is invalid or already used")

        user = await self.identity.resolve_or_create(payload)
        return await self.lifecycle.issue(user)

    async def refresh(self, refresh_token: Optional[str]) -> IssuedPair:
        if not refresh_token:
            raise UnauthorizedError("Refresh token missing")
        return await self.lifecycle.rotate(refresh_token)

    async def logout(self, refresh_token: Optional[str]) -> None:
        await self.lifecycle.revoke(refresh_token)
