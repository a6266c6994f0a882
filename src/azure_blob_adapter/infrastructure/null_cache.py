"""Cache service that stores nothing."""

from azure_blob_adapter.infrastructure.interfaces import CacheService


class NullCacheService(CacheService):
    """Pass-through cache used when metadata caching is disabled."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str) -> None:
        pass

    def delete(self, key: str) -> None:
        pass
