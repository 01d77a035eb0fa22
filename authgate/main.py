"""
Authgate API application.

Builds the gateway's authentication boundary: the auth endpoints, the
trust boundary middleware and the downstream forwarder.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

import httpx
import uvicorn
from fastapi import FastAPI, Request

from .config.provider import ConfigProvider, EnvConfigProvider
from .logging_config import configure_logging, get_logging_config
from .modules.api import HealthResponse, RefreshCookiePolicy, create_auth_router
from .modules.auth.factory import AuthFactory
from .modules.auth.identity import UserDirectory
from .modules.errors import register_error_handlers
from .modules.middleware import create_device_id_middleware, create_trust_boundary_middleware
from .modules.proxy import DownstreamProxy
from .modules.storage import create_redis_client
from .modules.userservice import UserServiceClient

logger = logging.getLogger(__name__)

FORWARD_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


def create_app(
    config_provider: Optional[ConfigProvider] = None,
    redis_client: Optional[Any] = None,
    user_directory: Optional[UserDirectory] = None,
    downstream_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    Secrets and lifetimes are validated here, so an invalid configuration
    stops the process before it serves any request.

    Args:
        config_provider: Configuration source, environment by default
        redis_client: Async Redis client, created from configuration by default
        user_directory: User-profile collaborator, HTTP client by default
        downstream_transport: Optional httpx transport for the forwarder

    Returns:
        Configured FastAPI application
    """
    config_provider = config_provider or EnvConfigProvider()
    token_config = config_provider.get_token_config()
    gateway_config = config_provider.get_gateway_config()

    owns_redis = redis_client is None
    if owns_redis:
        redis_client = create_redis_client(config_provider.get_redis_config())

    user_client = None
    if user_directory is None:
        user_client = UserServiceClient(config_provider.get_user_service_config())
        user_directory = user_client

    stack = AuthFactory.build(config_provider, redis_client, user_directory)
    proxy = DownstreamProxy(
        gateway_config.downstream_url,
        timeout=gateway_config.forward_timeout,
        transport=downstream_transport,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Authgate API starting")
        yield
        logger.info("Authgate API shutting down")
        await proxy.aclose()
        if user_client is not None:
            await user_client.aclose()
        if owns_redis:
            await redis_client.aclose()

    app = FastAPI(
        title="Authgate API",
        description="Authentication boundary for the API gateway",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.auth_service = stack.service
    app.state.login_success = stack.login_success

    register_error_handlers(app)
    cookie_config = config_provider.get_cookie_config()
    app.middleware("http")(create_trust_boundary_middleware(stack.signer, gateway_config))
    # added last so it wraps the trust boundary and also marks rejected requests
    app.middleware("http")(create_device_id_middleware(gateway_config, secure=cookie_config.secure))

    cookies = RefreshCookiePolicy(cookie_config, token_config.refresh_ttl_seconds)
    app.include_router(create_auth_router(stack.service, cookies))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse()

    async def forward(request: Request, path: str):
        return await proxy.forward(request)

    app.add_api_route("/{path:path}", forward, methods=FORWARD_METHODS, include_in_schema=False)
    return app


def main():
    """Run the API server."""
    api_config = EnvConfigProvider().get_api_config()
    configure_logging(api_config.log_level)
    uvicorn.run(
        "authgate.main:create_app",
        factory=True,
        host=api_config.host,
        port=api_config.port,
        log_config=get_logging_config(api_config.log_level),
    )


if __name__ == "__main__":
    main()
