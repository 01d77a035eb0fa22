"""
Shared pytest fixtures for Authgate tests.

This module provides:
- Isolated fakeredis servers (Lua enabled) for store semantics
- An in-memory user directory standing in for the user-profile service
- A fully wired application with a FastAPI TestClient
"""

from typing import Dict, List, Optional, Tuple

import fakeredis
import httpx
import pytest
from fastapi.testclient import TestClient

from authgate.config.provider import (
    CookieConfig,
    GatewayConfig,
    StaticConfigProvider,
    TokenConfig,
)
from authgate.main import create_app
from authgate.modules.auth.identity import UserIdentityService
from authgate.modules.auth.lifecycle import TokenLifecycleManager
from authgate.modules.auth.refresh import HmacRefreshTokenHasher
from authgate.modules.auth.service import DefaultAuthenticationService
from authgate.modules.auth.signer import JwtCredentialSigner
from authgate.modules.storage import RedisExchangeCodeStore, RedisRefreshTokenStore
from authgate.modules.userservice.models import UserSummary

ACCESS_SECRET = "access-secret-for-tests-0123456789abcdef"
REFRESH_SECRET = "refresh-secret-for-tests-0123456789abcdef"
ACCESS_TTL = 900
REFRESH_TTL = 1209600


class FakeUserDirectory:
    """In-memory user-profile service."""

    def __init__(self):
        self.users: Dict[str, UserSummary] = {}
        self.oauth_links: Dict[Tuple[str, str], str] = {}
        self.created: List[Tuple[str, str, Optional[str]]] = []

    def add(self, user_id: str, nickname: Optional[str], roles: List[str],
            provider: Optional[str] = None, provider_user_id: Optional[str] = None) -> UserSummary:
        user = UserSummary(id=user_id, nickname=nickname, roles=roles)
        self.users[user_id] = user
        if provider and provider_user_id:
            self.oauth_links[(provider, provider_user_id)] = user_id
        return user

    async def find_by_oauth(self, provider: str, provider_user_id: str) -> Optional[UserSummary]:
        user_id = self.oauth_links.get((provider, provider_user_id))
        return self.users.get(user_id) if user_id else None

    async def create_oauth_user(self, provider: str, provider_user_id: str,
                                nickname: Optional[str]) -> UserSummary:
        self.created.append((provider, provider_user_id, nickname))
        user_id = str(len(self.users) + 1)
        return self.add(user_id, nickname, ["USER"], provider, provider_user_id)

    async def find_by_id(self, user_id: str) -> Optional[UserSummary]:
        return self.users.get(user_id)


@pytest.fixture
def redis_server():
    """A private fakeredis server per test."""
    return fakeredis.FakeServer()


@pytest.fixture
def fake_redis(redis_server):
    """Async client on the private server."""
    return fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def sync_redis(redis_server):
    """Sync client for inspecting state from synchronous tests."""
    return fakeredis.FakeRedis(server=redis_server, decode_responses=True)


@pytest.fixture
def token_config():
    return TokenConfig(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        access_ttl_seconds=ACCESS_TTL,
        refresh_ttl_seconds=REFRESH_TTL,
        exchange_code_ttl_seconds=60,
        login_success_redirect_uri="https://app.example.com/login/callback",
    )


@pytest.fixture
def signer():
    return JwtCredentialSigner(ACCESS_SECRET, ACCESS_TTL)


@pytest.fixture
def hasher():
    return HmacRefreshTokenHasher(REFRESH_SECRET)


@pytest.fixture
def refresh_store(fake_redis):
    return RedisRefreshTokenStore(fake_redis)


@pytest.fixture
def exchange_store(fake_redis):
    return RedisExchangeCodeStore(fake_redis)


@pytest.fixture
def user_directory():
    directory = FakeUserDirectory()
    directory.add("7", "Ann", ["USER"], "x", "42")
    return directory


@pytest.fixture
def identity(user_directory):
    return UserIdentityService(user_directory)


@pytest.fixture
def lifecycle(signer, hasher, refresh_store, identity):
    return TokenLifecycleManager(
        signer=signer,
        hasher=hasher,
        store=refresh_store,
        subjects=identity,
        refresh_ttl_seconds=REFRESH_TTL,
    )


@pytest.fixture
def auth_service(exchange_store, identity, lifecycle):
    return DefaultAuthenticationService(exchange_store, identity, lifecycle)


@pytest.fixture
def config_provider(token_config):
    return StaticConfigProvider(
        token=token_config,
        cookie=CookieConfig(),
        gateway=GatewayConfig(downstream_url="http://downstream.internal"),
    )


@pytest.fixture
def downstream_requests():
    """Requests seen by the mocked downstream service."""
    return []


@pytest.fixture
def downstream_transport(downstream_requests):
    def handler(request: httpx.Request) -> httpx.Response:
        downstream_requests.append(request)
        return httpx.Response(200, json={"path": request.url.path})

    return httpx.MockTransport(handler)


@pytest.fixture
def app(config_provider, redis_server, user_directory, downstream_transport):
    return create_app(
        config_provider=config_provider,
        redis_client=fakeredis.FakeAsyncRedis(server=redis_server, decode_responses=True),
        user_directory=user_directory,
        downstream_transport=downstream_transport,
    )


@pytest.fixture
def client(app):
    # base_url must be https so Secure cookies are sent back
    with TestClient(app, base_url="https://gateway.test") as test_client:
        yield test_client
