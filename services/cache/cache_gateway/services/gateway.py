"""Gateway service: translate cache requests into single Redis commands.

Flow (per request):
1. Acquire a dedicated connection from the shared pool
2. Issue exactly one command (SET / SETEX / GET)
3. Release the connection, classify the outcome

No retries, fallbacks or locking: every failure is terminal for the request
and is logged exactly once here before it reaches the router.
"""

import logging

import redis.asyncio as redis
from redis.exceptions import RedisError, ResponseError

from cache_gateway.schemas import CacheEntry
from cache_gateway.stores.redis import open_connection

logger = logging.getLogger("uvicorn.error")

# Error text some stores return instead of a nil reply for absent keys.
NOT_FOUND_SIGNATURE = "no such key"


class StoreError(RuntimeError):
    """Base class for failures talking to the store."""


class StoreConnectionError(StoreError):
    """The store could not be reached."""


class StoreCommandError(StoreError):
    """The store rejected or failed to execute a command."""


class KeyNotFoundError(StoreError):
    """The requested key does not exist in the store."""


def is_not_found_error(exc: Exception) -> bool:
    """Whether a store error describes an absent key."""
    return isinstance(exc, ResponseError) and NOT_FOUND_SIGNATURE in str(exc)


async def _connect() -> redis.Redis:
    try:
        return await open_connection()
    except (RedisError, OSError, RuntimeError) as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise StoreConnectionError(str(e)) from e


async def set_entry(entry: CacheEntry) -> None:
    """Store `entry`, with expiration when it carries a ttl.

    Raises:
        StoreConnectionError: If no connection could be acquired.
        StoreCommandError: If the SET/SETEX command failed.
    """
    conn = await _connect()
    try:
        if entry.ttl is not None:
            await conn.setex(entry.key, entry.ttl, entry.value)
        else:
            await conn.set(entry.key, entry.value)
    except (RedisError, OSError, UnicodeError) as e:
        logger.error(f"Failed to set cache for key {entry.key}: {e}")
        raise StoreCommandError(str(e)) from e
    finally:
        await conn.aclose()

    logger.info(f"Successfully cached value for key: {entry.key}")


async def get_entry(key: str) -> str:
    """Fetch the value stored under `key`.

    Raises:
        StoreConnectionError: If no connection could be acquired.
        KeyNotFoundError: If the key is absent.
        StoreCommandError: For any other store failure (e.g. WRONGTYPE).
    """
    conn = await _connect()
    try:
        value = await conn.get(key)
    except (RedisError, OSError, UnicodeError) as e:
        if is_not_found_error(e):
            logger.info(f"Key not found: {key}")
            raise KeyNotFoundError(key) from e
        logger.error(f"Failed to get cache for key {key}: {e}")
        raise StoreCommandError(str(e)) from e
    finally:
        await conn.aclose()

    if value is None:
        logger.info(f"Key not found: {key}")
        raise KeyNotFoundError(key)

    logger.info(f"Retrieved value for key: {key}")
    return value
