"""Read cache for projects and users backed by optional Redis.

Entries hold the JSON wire form of a record keyed by `<prefix>:<id>`. The
client connects lazily on first use; when REDIS_URL is unset or the server
cannot be reached, get_redis() returns None and every read is a miss.
Eviction runs after the primary write has committed and never raises.
"""

from uuid import UUID

from redis.asyncio import ConnectionPool, Redis

from src.catalog.core.config import get_settings
from src.catalog.core.logging import get_logger

logger = get_logger(__name__)

PREFIX_PROJECT = "project"
PREFIX_USER = "user"

_pool: ConnectionPool | None = None
_redis: Redis | None = None
_connection_attempted: bool = False


async def get_redis() -> Redis | None:
    """Get the shared cache client, or None when unavailable.

    The first call connects; a failed attempt is not retried until close_redis().
    """
    global _pool, _redis, _connection_attempted

    if _redis is not None:
        return _redis

    if _connection_attempted:
        return None

    _connection_attempted = True
    settings = get_settings()

    if not settings.redis_url:
        logger.info("Redis not configured, read cache disabled")
        return None

    try:
        _pool = ConnectionPool.from_url(
            settings.redis_url,
            max_connections=settings.redis_pool_size,
            decode_responses=True,
        )
        _redis = Redis(connection_pool=_pool)
        await _redis.ping()  # type: ignore[misc]
        logger.info("Redis connected")
        return _redis

    except Exception as e:
        logger.warning("Redis connection failed, read cache disabled", error=str(e))
        await close_redis()
        _connection_attempted = True
        return None


async def close_redis() -> None:
    """Close the connection pool. Called during application shutdown."""
    global _pool, _redis, _connection_attempted

    if _redis:
        await _redis.aclose()
    if _pool:
        await _pool.disconnect()

    _redis = None
    _pool = None
    _connection_attempted = False


def reset_redis_state() -> None:
    """Forget the current client so the next get_redis() reconnects (tests)."""
    global _pool, _redis, _connection_attempted
    _redis = None
    _pool = None
    _connection_attempted = False


def _key(prefix: str, entity_id: UUID | str) -> str:
    return f"{prefix}:{entity_id}"


async def _get(prefix: str, entity_id: UUID | str) -> str | None:
    redis = await get_redis()
    if not redis:
        return None
    return await redis.get(_key(prefix, entity_id))


async def _set(prefix: str, entity_id: UUID | str, payload: str, ttl: int) -> bool:
    redis = await get_redis()
    if not redis:
        return False
    await redis.setex(_key(prefix, entity_id), ttl, payload)
    return True


async def _evict(prefix: str, entity_id: UUID | str) -> bool:
    try:
        redis = await get_redis()
        if not redis:
            return False
        await redis.delete(_key(prefix, entity_id))
        return True
    except Exception as e:
        logger.warning(
            "Could not evict cache entry",
            entity=prefix,
            entity_id=str(entity_id),
            error=str(e),
        )
        return False


async def get_cached_project(project_id: UUID | str) -> str | None:
    """Return the cached JSON document for a project, or None on miss/unavailable."""
    return await _get(PREFIX_PROJECT, project_id)


async def cache_project(project_id: UUID | str, payload: str) -> bool:
    """Store a project's JSON document with the configured TTL.

    Returns:
        True if written to Redis, False if Redis is unavailable
    """
    return await _set(PREFIX_PROJECT, project_id, payload, get_settings().project_cache_ttl_seconds)


async def evict_project(project_id: UUID | str) -> bool:
    """Drop a project's cache entry after a mutation. Failures return False."""
    return await _evict(PREFIX_PROJECT, project_id)


async def get_cached_user(user_id: UUID | str) -> str | None:
    return await _get(PREFIX_USER, user_id)


async def cache_user(user_id: UUID | str, payload: str) -> bool:
    return await _set(PREFIX_USER, user_id, payload, get_settings().user_cache_ttl_seconds)


async def evict_user(user_id: UUID | str) -> bool:
    """Drop a user's cache entry after a mutation. Failures return False."""
    return await _evict(PREFIX_USER, user_id)
