"""Redis store: the shared connection factory behind the gateway.

Handles:
- Building the process-wide client (and its connection pool) on startup
- Handing out one dedicated connection per request
- Closing the pool on shutdown

The client is created once and never mutated afterwards, so request handlers
share it without locking. Storage, eviction and expiration all live in Redis;
nothing is cached here.
"""

import logging

import redis.asyncio as redis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff

from cache_gateway.settings import get_settings

# Redis client (initialized on startup)
_redis: redis.Redis | None = None
logger = logging.getLogger("uvicorn.error")


def build_redis_client(
    url: str,
    *,
    socket_timeout: float | None = None,
    socket_connect_timeout: float | None = None,
    max_connections: int | None = None,
) -> redis.Redis:
    """Build a Redis client for `url` without connecting.

    Failed commands are never retried: the client carries a zero-retry policy.
    With `max_connections` set, the pool blocks callers until a connection is
    free instead of failing requests beyond the cap.
    """
    options = dict(
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_connect_timeout,
        retry=Retry(NoBackoff(), 0),
    )
    if max_connections is None:
        return redis.from_url(url, **options)

    pool = redis.BlockingConnectionPool.from_url(
        url,
        max_connections=max_connections,
        timeout=None,
        **options,
    )
    return redis.Redis.from_pool(pool)


async def init_redis() -> None:
    """Initialize the shared Redis client.

    Connections are opened lazily, so this succeeds even when Redis is down.
    """
    global _redis
    settings = get_settings()
    _redis = build_redis_client(
        settings.redis_url,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_connect_timeout,
        max_connections=settings.redis_max_connections,
    )
    logger.info(f"Redis client configured for {_redacted(settings.redis_url)}")


async def ping_redis() -> None:
    """Round-trip a PING through the shared client."""
    await _get_redis().ping()


async def close_redis() -> None:
    """Close Redis connection pool."""
    global _redis
    if _redis:
        await _redis.aclose()
        _redis = None


def set_redis(client: redis.Redis | None) -> None:
    """Install `client` as the shared client (used by tooling and tests)."""
    global _redis
    _redis = client


def _get_redis() -> redis.Redis:
    """Get Redis client instance."""
    if _redis is None:
        raise RuntimeError("Redis not initialized. Call init_redis() first.")
    return _redis


async def open_connection() -> redis.Redis:
    """Acquire a dedicated connection from the shared pool.

    The returned client is pinned to a single pooled connection, which is
    established here; connection failures surface from this call. Callers
    must ``aclose()`` it to hand the connection back to the pool.

    Raises:
        RuntimeError: If the shared client was never initialized.
        redis.exceptions.ConnectionError: If Redis cannot be reached.
    """
    conn = redis.Redis(
        connection_pool=_get_redis().connection_pool,
        single_connection_client=True,
    )
    await conn.initialize()
    return conn


def _redacted(url: str) -> str:
    """Strip credentials from a Redis URL for logging."""
    scheme, sep, rest = url.partition("://")
    if not sep or "@" not in rest:
        return url
    return f"{scheme}://***@{rest.rsplit('@', 1)[1]}"
