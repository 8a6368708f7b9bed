"""
Cache Service Singleton - Audition Judging Platform
judging/services/cache.py

Provides a singleton Redis cache instance, the results TTL and key helpers.
Gracefully handles Redis unavailability.

Cached results are stored under a versioned key. Invalidation bumps the
event's version counter, so a payload computed before an invalidation can
only land under a version nobody reads again.
"""
import redis
import structlog
from typing import Optional
from judging.services.redis_cache import RedisCache
from judging.config import settings

logger = structlog.get_logger(__name__)

# TTL in seconds
TTL_RESULTS = settings.CACHE_TTL_RESULTS

# Singleton instance
_cache: Optional[RedisCache] = None


def results_key(organization_id: str, event_id: str, version: int = 0) -> str:
    """Cache key for one version of the ranked results of an event."""
    return f"results:{organization_id}:{event_id}:v{version}"


def results_version_key(organization_id: str, event_id: str) -> str:
    """Counter bumped whenever the event's results change."""
    return f"results_version:{organization_id}:{event_id}"


def get_cache() -> Optional[RedisCache]:
    """
    Get or create Redis cache instance.

    Returns:
        RedisCache instance if caching is enabled and Redis is available,
        None otherwise.

    Note:
        Returns None if Redis is unavailable, allowing the application
        to continue functioning without caching (graceful degradation).
    """
    global _cache
    if not settings.CACHE_ENABLED:
        return None
    if _cache is None:
        try:
            _cache = RedisCache()
            _cache.client.ping()  # Test connection
        except (redis.RedisError, ConnectionError) as e:
            logger.warning("redis_unavailable", error=str(e))
            _cache = None
    return _cache


def reset_cache() -> None:
    """
    Reset the cache singleton.

    Useful for testing or when Redis connection needs to be re-established.
    """
    global _cache
    _cache = None


def invalidate_results(cache: Optional[RedisCache], organization_id: str, event_id: str) -> None:
    """Move an event's results to a new version. Redis errors are logged, not raised."""
    if cache is None:
        return
    try:
        cache.bump_version(results_version_key(organization_id, event_id))
    except redis.RedisError as e:
        logger.warning(
            "results_cache_invalidate_failed",
            organization_id=organization_id,
            event_id=event_id,
            error=str(e),
        )
