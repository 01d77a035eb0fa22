import logging
from typing import Optional

from ..errors import ConfigurationError
from .errors import store_call

logger = logging.getLogger(__name__)

KEY_PREFIX = "auth:refresh:"

# KEYS[1] old hash key, KEYS[2] new hash key, ARGV[1] ttl seconds
ROTATE_SCRIPT = """
local subject = redis.call("GET", KEYS[1])
if not subject then
  return nil
end
redis.call("DEL", KEYS[1])
redis.call("SET", KEYS[2], subject, "EX", ARGV[1])
return subject
"""


class RedisRefreshTokenStore:
    """Hashed refresh token -> subject id, with atomic rotation."""

    def __init__(self, redis_client):
        self.redis = redis_client
        self._rotate = redis_client.register_script(ROTATE_SCRIPT)

    @staticmethod
    def _key(hashed: str) -> str:
        return f"{KEY_PREFIX}{hashed}"

    @staticmethod
    def _check_ttl(ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            raise ConfigurationError(f"Invalid refresh token TTL: {ttl_seconds}")

    async def save(self, hashed: str, subject_id: str, ttl_seconds: int) -> bool:
        self._check_ttl(ttl_seconds)
        async with store_call("refresh save"):
            result = await self.redis.set(self._key(hashed), str(subject_id), ex=ttl_seconds)
        return bool(result)

    async def delete(self, hashed: str) -> bool:
        async with store_call("refresh delete"):
            removed = await self.redis.delete(self._key(hashed))
        return removed > 0

    async def rotate(self, old_hashed: str, new_hashed: str, ttl_seconds: int) -> Optional[str]:
        """
        Move ownership from the old hash to the new one in a single script.

        Args:
            old_hashed: Hash of the presented refresh token
            new_hashed: Hash of the replacement token
            ttl_seconds: Lifetime of the replacement

        Returns:
            Subject id if the old token was live, None otherwise
        """
        self._check_ttl(ttl_seconds)
        async with store_call("refresh rotate"):
            subject = await self._rotate(
                keys=[self._key(old_hashed), self._key(new_hashed)],
                args=[ttl_seconds],
            )
        if subject is None:
            logger.debug("Refresh rotation found no live token")
            return None
        if isinstance(subject, bytes):
            subject = subject.decode("utf-8")
        return subject
