"""Infrastructure layer exports."""

from azure_blob_adapter.infrastructure.azure_blob_storage import AzureBlobStorageAdapter
from azure_blob_adapter.infrastructure.cached_filesystem import CachedFilesystem
from azure_blob_adapter.infrastructure.memory_cache import MemoryCacheService
from azure_blob_adapter.infrastructure.null_cache import NullCacheService
from azure_blob_adapter.infrastructure.redis_cache import RedisCacheService

__all__ = [
    "AzureBlobStorageAdapter",
    "CachedFilesystem",
    "MemoryCacheService",
    "NullCacheService",
    "RedisCacheService",
]
