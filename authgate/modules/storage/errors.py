"""Redis error translation shared by the stores."""

import logging
from contextlib import asynccontextmanager

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ..errors import InternalError, UnavailableError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def store_call(operation: str):
    """
    Translate Redis failures raised inside the block.

    A timeout is reported as a failure even though the command may have
    reached the server.
    """
    try:
        yield
    except (RedisTimeoutError, RedisConnectionError) as e:
        logger.error(f"Store {operation} failed: {type(e).__name__}: {e}")
        raise UnavailableError(f"Store {operation} unavailable") from e
    except RedisError as e:
        logger.error(f"Store {operation} failed: {type(e).__name__}: {e}")
        raise InternalError(f"Store {operation} failed") from e
