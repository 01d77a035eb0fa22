"""
Storage Module - Black Box Interface

Purpose: Persist one-time exchange codes and hashed refresh tokens
Interface: create_redis_client(), RedisExchangeCodeStore, RedisRefreshTokenStore
Hidden: Key layout, Lua rotation script, serialization, Redis error translation

Can be replaced with any storage backend that offers atomic get-and-delete
and an atomic compare-and-move without affecting other modules.
"""

import redis.asyncio as redis

from ...config.provider import RedisConfig
from .exchange_store import RedisExchangeCodeStore
from .refresh_store import RedisRefreshTokenStore


def create_redis_client(config: RedisConfig) -> redis.Redis:
    """Create the shared Redis client; connections are opened lazily."""
    return redis.from_url(
        config.url,
        password=config.password,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=config.socket_timeout,
        socket_connect_timeout=config.socket_timeout,
    )


__all__ = ["create_redis_client", "RedisExchangeCodeStore", "RedisRefreshTokenStore"]
