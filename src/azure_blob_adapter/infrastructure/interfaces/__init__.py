"""Infrastructure interface exports."""

from azure_blob_adapter.infrastructure.interfaces.cache_service import CacheService
from azure_blob_adapter.infrastructure.interfaces.filesystem import Filesystem

__all__ = [
    "CacheService",
    "Filesystem",
]
