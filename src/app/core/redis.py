"""Optional Redis client.

Redis backs the access-token blacklist and the rate limiter. When REDIS_URL is
unset or the server is unreachable, callers get None and carry on without it.
"""

from redis.asyncio import ConnectionPool, Redis

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Return the shared client, connecting lazily on first use.

    A failed connection is not retried until close_redis() resets the state.
    """
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        return _redis
    if _connection_attempted:
        return None
    _connection_attempted = True

    settings = get_settings()
    if not settings.redis_url:
        logger.info("Redis not configured, token revocation disabled")
        return None

    _pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=settings.redis_pool_size,
        decode_responses=True,
    )
    client = Redis(connection_pool=_pool)
    try:
        await client.ping()  # type: ignore[misc]
    except Exception as e:
        logger.warning("Redis connection failed, continuing without it", error=str(e))
        await client.aclose()
        await _pool.disconnect()
        _pool = None
        return None

    _redis = client
    logger.info("Redis connected")
    return _redis


def set_redis(client: Redis | None) -> None:
    """Install a client directly (tests use fakeredis)."""
    global _redis, _connection_attempted
    _redis = client
    _connection_attempted = client is not None


async def close_redis() -> None:
    """Close the client and pool, allowing a fresh connection attempt later."""
    global _pool, _redis, _connection_attempted

    if _redis:
        await _redis.aclose()
        logger.info("Redis connection closed")
    if _pool:
        await _pool.disconnect()

    _redis = None
    _pool = None
    _connection_attempted = False
