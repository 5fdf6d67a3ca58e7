import logging

from redis.asyncio import ConnectionPool, Redis

from kigaers.config import get_settings

logger = logging.getLogger(__name__)

_pool: ConnectionPool | None = None


def get_redis_pool() -> ConnectionPool:
    """Shared pool for the search page cache, created on first use."""
    global _pool
    if _pool is None:
        settings = get_settings()
        _pool = ConnectionPool(
            host=settings.redis_host,
            port=settings.redis_port,
            decode_responses=True,
            max_connections=10,
            # A slow cache must never hold up a search.
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        logger.info(f"Redis pool created for {settings.redis_host}:{settings.redis_port}")
    return _pool


def get_redis_client() -> Redis:
    return Redis(connection_pool=get_redis_pool())


async def close_redis_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.disconnect()
        _pool = None
