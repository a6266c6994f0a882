"""Filesystem decorator caching existence and metadata lookups."""

from collections.abc import Iterator
from datetime import datetime
from typing import BinaryIO

from azure_blob_adapter.infrastructure.interfaces import CacheService, Filesystem
from azure_blob_adapter.models import FileAttributes


def _normalize(path: str) -> str:
    return path[1:] if path.startswith("/") else path


class CachedFilesystem(Filesystem):
    """
    Wraps another filesystem and caches file_exists and get_metadata results.

    Entries for a path are dropped whenever the decorator itself writes,
    deletes, copies or moves that path, even when the inner call fails.
    Changes made to the container by other processes are only seen once the
    cache entry expires.
    """

    def __init__(self, inner: Filesystem, cache: CacheService):
        self._inner = inner
        self._cache = cache

    def _forget(self, path: str) -> None:
        path = _normalize(path)
        self._cache.delete(f"exists:{path}")
        self._cache.delete(f"metadata:{path}")

    def write(self, path: str, contents: bytes | str, content_type: str | None = None) -> None:
        try:
            self._inner.write(path, contents, content_type)
        finally:
            self._forget(path)

    def write_stream(self, path: str, stream: BinaryIO, content_type: str | None = None) -> None:
        try:
            self._inner.write_stream(path, stream, content_type)
        finally:
            self._forget(path)

    def read(self, path: str) -> bytes:
        return self._inner.read(path)

    def read_stream(self, path: str) -> Iterator[bytes]:
        return self._inner.read_stream(path)

    def delete(self, path: str) -> None:
        try:
            self._inner.delete(path)
        finally:
            self._forget(path)

    def delete_directory(self, path: str) -> None:
        entries = self._inner.list_contents(path, recursive=True)
        try:
            self._inner.delete_directory(path)
        finally:
            for entry in entries:
                self._forget(entry.path)

    def create_directory(self, path: str) -> None:
        self._inner.create_directory(path)

    def file_exists(self, path: str) -> bool:
        key = f"exists:{_normalize(path)}"
        cached = self._cache.get(key)
        if cached is not None:
            return cached == "1"
        exists = self._inner.file_exists(path)
        self._cache.set(key, "1" if exists else "0")
        return exists

    def directory_exists(self, path: str) -> bool:
        return self._inner.directory_exists(path)

    def get_metadata(self, path: str) -> FileAttributes:
        key = f"metadata:{_normalize(path)}"
        cached = self._cache.get(key)
        if cached is not None:
            return FileAttributes.model_validate_json(cached)
        attributes = self._inner.get_metadata(path)
        self._cache.set(key, attributes.model_dump_json())
        return attributes

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[FileAttributes]:
        return self._inner.list_contents(directory, recursive)

    def copy(self, source: str, destination: str) -> None:
        try:
            self._inner.copy(source, destination)
        finally:
            self._forget(destination)

    def move(self, source: str, destination: str) -> None:
        try:
            self._inner.move(source, destination)
        finally:
            self._forget(source)
            self._forget(destination)

    def get_url(self, path: str) -> str:
        return self._inner.get_url(path)

    def get_temporary_url(self, path: str, expires_at: datetime) -> str:
        return self._inner.get_temporary_url(path, expires_at)
