import logging
from typing import Optional

from pydantic import ValidationError

from ..auth.interfaces import ExchangePayload
from ..errors import InternalError
from .errors import store_call

logger = logging.getLogger(__name__)

KEY_PREFIX = "auth:code:"


class RedisExchangeCodeStore:
    def __init__(self, redis_client):
        """
        Initialize exchange code store.

        Args:
            redis_client: Async Redis client with decode_responses enabled
        """
        self.redis = redis_client

    @staticmethod
    def _key(code: str) -> str:
        return f"{KEY_PREFIX}{code}"

    async def save(self, code: str, payload: ExchangePayload, ttl_seconds: int) -> bool:
        """
        Store a payload under a freshly minted code.

        Returns:
            True if the store acknowledged the write
        """
        if not code or not code.strip():
            raise InternalError("Exchange code must not be blank")
        if ttl_seconds <= 0:
            raise InternalError(f"Exchange code TTL must be positive, got {ttl_seconds}")

        value = payload.model_dump_json(by_alias=True)
        async with store_call("exchange save"):
            result = await self.redis.set(self._key(code), value, ex=ttl_seconds)
        return bool(result)

    async def consume(self, code: str) -> Optional[ExchangePayload]:
        """
        Atomically read and delete a code.

        Returns:
            The payload, or None if the code is unknown, expired or already used
        """
        if not code:
            return None
        async with store_call("exchange consume"):
            value = await self.redis.getdel(self._key(code))
        if value is None:
            return None

        try:
            return ExchangePayload.model_validate_json(value)
        except ValidationError as e:
            logger.error(f"Stored exchange payload is unreadable: {e.error_count()} errors")
            raise InternalError("Failed to parse exchange payload") from e
