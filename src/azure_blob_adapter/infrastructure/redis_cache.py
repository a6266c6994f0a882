"""Redis cache service implementation."""

import logging

import redis

from azure_blob_adapter.exceptions import CacheServiceError
from azure_blob_adapter.infrastructure.interfaces import CacheService

logger = logging.getLogger(__name__)


class RedisCacheService(CacheService):
    """Cache service implementation using Redis."""

    def __init__(self, client: redis.Redis, prefix: str, ttl_seconds: int | None = None):
        self._client = client
        self._prefix = prefix
        self._ttl_seconds = ttl_seconds

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> str | None:
        """
        Retrieves a value from Redis cache.

        Args:
            key: The cache key.

        Returns:
            The cached value or None if not found.

        Raises:
            CacheServiceError: If the Redis operation fails.
        """
        try:
            value = self._client.get(self._key(key))
            if value is not None:
                logger.debug("Cache hit", extra={"key": key})
            return value
        except redis.RedisError as e:
            logger.exception("Redis get failed", extra={"key": key})
            raise CacheServiceError(key, "get", cause=e) from e

    def set(self, key: str, value: str) -> None:
        """
        Stores a value in Redis cache, with the configured TTL if any.

        Args:
            key: The cache key.
            value: The value to cache.

        Raises:
            CacheServiceError: If the Redis operation fails.
        """
        try:
            self._client.set(self._key(key), value, ex=self._ttl_seconds)
            logger.debug("Cache set", extra={"key": key, "ttl": self._ttl_seconds})
        except redis.RedisError as e:
            logger.exception("Redis set failed", extra={"key": key})
            raise CacheServiceError(key, "set", cause=e) from e

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except redis.RedisError as e:
            logger.exception("Redis delete failed", extra={"key": key})
            raise CacheServiceError(key, "delete", cause=e) from e
