"""In-process cache service implementation."""

import threading
import time

from azure_blob_adapter.infrastructure.interfaces import CacheService


class MemoryCacheService(CacheService):
    """Cache service keeping entries in a dict for the lifetime of the process."""

    def __init__(self, prefix: str, ttl_seconds: int | None = None):
        self._prefix = prefix
        self._ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[str, float | None]] = {}
        self._lock = threading.Lock()

    def _key(self, key: str) -> str:
        return f"{self._prefix}:{key}"

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(self._key(key))
            if entry is None:
                return None
            value, expires_at = entry
            if expires_at is not None and expires_at <= time.monotonic():
                del self._entries[self._key(key)]
                return None
            return value

    def set(self, key: str, value: str) -> None:
        now = time.monotonic()
        expires_at = None
        if self._ttl_seconds is not None:
            expires_at = now + self._ttl_seconds
        with self._lock:
            self._purge_expired(now)
            self._entries[self._key(key)] = (value, expires_at)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(self._key(key), None)

    def _purge_expired(self, now: float) -> None:
        expired = [
            name
            for name, (_, expires_at) in self._entries.items()
            if expires_at is not None and expires_at <= now
        ]
        for name in expired:
            del self._entries[name]
