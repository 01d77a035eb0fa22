"""
Authentication Factory following Black Box Design principles.

This factory:
- Validates signing material before anything else is built
- Wires stores, identity resolution and the token lifecycle together
- Returns the facade and the few components the HTTP layer needs
"""

import logging
from dataclasses import dataclass
from typing import Any

from ...config.provider import ConfigProvider
from ..storage import RedisExchangeCodeStore, RedisRefreshTokenStore
from .exchange import OAuthLoginSuccessHandler
from .identity import UserDirectory, UserIdentityService
from .lifecycle import TokenLifecycleManager
from .refresh import HmacRefreshTokenHasher
from .service import AuthenticationService, DefaultAuthenticationService
from .signer import JwtCredentialSigner

logger = logging.getLogger(__name__)


@dataclass
class AuthStack:
    """Components exposed to the application layer."""
    service: AuthenticationService
    signer: JwtCredentialSigner
    login_success: OAuthLoginSuccessHandler


class AuthFactory:
    """
    Factory for building the authentication stack.

    This is the composition root that:
    - Creates all auth components
    - Wires them together via dependency injection
    - Fails fast on invalid secrets or lifetimes
    """

    @staticmethod
    def build(
        config_provider: ConfigProvider,
        redis_client: Any,
        user_directory: UserDirectory,
    ) -> AuthStack:
        """
        Build the complete authentication stack.

        Args:
            config_provider: Configuration provider
            redis_client: Async Redis client shared by both stores
            user_directory: User-profile collaborator

        Returns:
            AuthStack with the service facade, signer and IdP success handler

        Raises:
            ConfigurationError: If a secret is too short or a TTL is not positive
        """
        token_config = config_provider.get_token_config()

        signer = JwtCredentialSigner(token_config.access_secret, token_config.access_ttl_seconds)
        hasher = HmacRefreshTokenHasher(token_config.refresh_secret)

        exchange_store = RedisExchangeCodeStore(redis_client)
        refresh_store = RedisRefreshTokenStore(redis_client)
        identity = UserIdentityService(user_directory)

        lifecycle = TokenLifecycleManager(
            signer=signer,
            hasher=hasher,
            store=refresh_store,
            subjects=identity,
            refresh_ttl_seconds=token_config.refresh_ttl_seconds,
        )
        service = DefaultAuthenticationService(exchange_store, identity, lifecycle)
        login_success = OAuthLoginSuccessHandler(
            exchange_store,
            token_config.exchange_code_ttl_seconds,
            token_config.login_success_redirect_uri,
        )

        logger.info(
            f"Built authentication stack (access ttl {token_config.access_ttl_seconds}s, "
            f"refresh ttl {token_config.refresh_ttl_seconds}s)"
        )
        return AuthStack(service=service, signer=signer, login_success=login_success)
