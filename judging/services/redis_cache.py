import redis
from typing import Optional, TypeVar, Type
from pydantic import BaseModel
from judging.config import settings

T = TypeVar("T", bound=BaseModel)


class RedisCache:
    """Pydantic-aware wrapper over a Redis client."""

    def __init__(self, url: Optional[str] = None):
        self.client = redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(key)
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL."""
        self.client.setex(
            key,
            ttl_seconds,
            value.model_dump_json(),
        )

    def delete(self, key: str) -> None:
        """Invalidate single cache entry."""
        self.client.delete(key)

    def delete_pattern(self, pattern: str) -> int:
        """Invalidate all keys matching pattern. Returns the number removed."""
        removed = 0
        for key in self.client.scan_iter(match=pattern):
            removed += self.client.delete(key)
        return removed

    def get_version(self, key: str) -> int:
        """Current value of a version counter (0 when unset)."""
        value = self.client.get(key)
        return int(value) if value else 0

    def bump_version(self, key: str) -> int:
        """Increment a version counter and return the new value."""
        return int(self.client.incr(key))
