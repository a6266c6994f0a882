"""Azure Blob Storage implementation of the Filesystem interface."""

import logging
import mimetypes
import time
from collections.abc import Iterator
from datetime import datetime
from typing import BinaryIO

from azure.core.exceptions import (
    AzureError,
    ClientAuthenticationError,
    ResourceNotFoundError,
)
from azure.storage.blob import BlobPrefix, BlobServiceClient, ContentSettings

from azure_blob_adapter.config import StorageConfig
from azure_blob_adapter.exceptions import (
    StorageObjectNotFoundError,
    StorageOperationError,
    StoragePermissionError,
)
from azure_blob_adapter.infrastructure.interfaces import Filesystem
from azure_blob_adapter.models import FileAttributes
from azure_blob_adapter.signing import SignedUrlGenerator
from azure_blob_adapter.url_resolver import PathResolver

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"
COPY_POLL_INTERVAL = 0.5  # seconds


def _translate_error(object_name: str, operation: str, error: AzureError) -> Exception:
    """Maps an Azure SDK error onto the adapter's storage errors."""
    if isinstance(error, ResourceNotFoundError):
        return StorageObjectNotFoundError(object_name, cause=error)
    if isinstance(error, ClientAuthenticationError) or getattr(error, "status_code", None) == 403:
        return StoragePermissionError(object_name, operation, cause=error)
    return StorageOperationError(object_name, operation, cause=error)


class AzureBlobStorageAdapter(Filesystem):
    """Handles file storage operations against one Azure blob container."""

    def __init__(self, client: BlobServiceClient, config: StorageConfig):
        self._resolver = PathResolver(config)
        self._signer = SignedUrlGenerator(config, self._resolver)
        self._container = client.get_container_client(config.container_name)
        logger.info(
            "Azure blob adapter initialized",
            extra={
                "account": config.account_name,
                "container": config.container_name,
                "prefix": config.key_prefix,
            },
        )

    def write(self, path: str, contents: bytes | str, content_type: str | None = None) -> None:
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self._upload(path, contents, content_type)

    def write_stream(self, path: str, stream: BinaryIO, content_type: str | None = None) -> None:
        self._upload(path, stream, content_type)

    def _upload(self, path: str, data: bytes | BinaryIO, content_type: str | None) -> None:
        object_name = self._resolver.object_name(path)
        content_type = content_type or mimetypes.guess_type(object_name)[0] or DEFAULT_CONTENT_TYPE
        try:
            self._container.upload_blob(
                name=object_name,
                data=data,
                overwrite=True,
                content_settings=ContentSettings(content_type=content_type),
            )
            logger.info(
                "File uploaded to Azure",
                extra={"object_name": object_name, "content_type": content_type},
            )
        except AzureError as e:
            logger.exception("Azure upload failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "write", e) from e

    def read(self, path: str) -> bytes:
        object_name = self._resolver.object_name(path)
        try:
            data = self._container.download_blob(object_name).readall()
            logger.info("File downloaded from Azure", extra={"object_name": object_name})
            return data
        except AzureError as e:
            logger.exception("Azure download failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "read", e) from e

    def read_stream(self, path: str) -> Iterator[bytes]:
        object_name = self._resolver.object_name(path)
        try:
            downloader = self._container.download_blob(object_name)
        except AzureError as e:
            logger.exception("Azure download failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "read", e) from e
        return self._iter_chunks(object_name, downloader)

    def _iter_chunks(self, object_name: str, downloader) -> Iterator[bytes]:
        try:
            yield from downloader.chunks()
        except AzureError as e:
            logger.exception("Azure download interrupted", extra={"object_name": object_name})
            raise _translate_error(object_name, "read", e) from e

    def delete(self, path: str) -> None:
        object_name = self._resolver.object_name(path)
        try:
            self._container.delete_blob(object_name)
            logger.info("File deleted from Azure", extra={"object_name": object_name})
        except AzureError as e:
            logger.exception("Azure delete failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "delete", e) from e

    def delete_directory(self, path: str) -> None:
        """
        Deletes every blob under the directory.

        Blob storage has no real directories, so the directory disappears
        once its last blob is gone.
        """
        prefix = self._directory_prefix(path)
        try:
            names = [blob.name for blob in self._container.list_blobs(name_starts_with=prefix)]
            for name in names:
                self._container.delete_blob(name)
            logger.info(
                "Directory deleted from Azure",
                extra={"prefix": prefix, "deleted": len(names)},
            )
        except AzureError as e:
            logger.exception("Azure directory delete failed", extra={"prefix": prefix})
            raise _translate_error(prefix or "", "delete", e) from e

    def create_directory(self, path: str) -> None:
        # Directories exist implicitly through the blobs beneath them.
        logger.debug(
            "Directory creation skipped",
            extra={"object_name": self._resolver.object_name(path)},
        )

    def file_exists(self, path: str) -> bool:
        object_name = self._resolver.object_name(path)
        try:
            return self._container.get_blob_client(object_name).exists()
        except AzureError as e:
            logger.exception("Azure existence check failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "check", e) from e

    def directory_exists(self, path: str) -> bool:
        prefix = self._directory_prefix(path)
        try:
            blobs = self._container.list_blobs(name_starts_with=prefix, results_per_page=1)
            return next(iter(blobs), None) is not None
        except AzureError as e:
            logger.exception("Azure directory check failed", extra={"prefix": prefix})
            raise _translate_error(prefix or "", "check", e) from e

    def get_metadata(self, path: str) -> FileAttributes:
        object_name = self._resolver.object_name(path)
        try:
            properties = self._container.get_blob_client(object_name).get_blob_properties()
        except AzureError as e:
            logger.exception("Azure metadata lookup failed", extra={"object_name": object_name})
            raise _translate_error(object_name, "inspect", e) from e
        return FileAttributes(
            path=self._resolver.relative_path(object_name),
            size=properties.size,
            last_modified=properties.last_modified,
            mime_type=_content_type(properties),
        )

    def list_contents(self, directory: str = "", recursive: bool = False) -> list[FileAttributes]:
        prefix = self._directory_prefix(directory)
        try:
            if recursive:
                items = self._container.list_blobs(name_starts_with=prefix)
            else:
                items = self._container.walk_blobs(name_starts_with=prefix, delimiter="/")
            contents = [self._to_attributes(item) for item in items]
        except AzureError as e:
            logger.exception("Azure listing failed", extra={"prefix": prefix})
            raise _translate_error(prefix or "", "list", e) from e
        logger.info("Contents listed", extra={"prefix": prefix, "count": len(contents)})
        return contents

    def copy(self, source: str, destination: str) -> None:
        """
        Copies a blob within the container and waits for the copy to finish.

        The service may complete a copy asynchronously; a pending copy is
        polled until it reaches a final state.

        Raises:
            StorageOperationError: If the copy ends in any state but success.
        """
        source_name = self._resolver.object_name(source)
        destination_name = self._resolver.object_name(destination)
        try:
            source_url = self._container.get_blob_client(source_name).url
            destination_client = self._container.get_blob_client(destination_name)
            status = destination_client.start_copy_from_url(source_url).get("copy_status")
            while status == "pending":
                time.sleep(COPY_POLL_INTERVAL)
                status = destination_client.get_blob_properties().copy.status
            if status != "success":
                logger.error(
                    "Azure copy did not complete",
                    extra={"source": source_name, "destination": destination_name, "status": status},
                )
                raise StorageOperationError(source_name, "copy")
            logger.info(
                "File copied in Azure",
                extra={"source": source_name, "destination": destination_name},
            )
        except AzureError as e:
            logger.exception(
                "Azure copy failed",
                extra={"source": source_name, "destination": destination_name},
            )
            raise _translate_error(source_name, "copy", e) from e

    def move(self, source: str, destination: str) -> None:
        self.copy(source, destination)
        self.delete(source)

    def get_url(self, path: str) -> str:
        return self._resolver.url(path)

    def get_temporary_url(self, path: str, expires_at: datetime) -> str:
        return self._signer.generate(path, expires_at)

    def _directory_prefix(self, directory: str) -> str | None:
        name = self._resolver.object_name(directory.rstrip("/"))
        return f"{name}/" if name else None

    def _to_attributes(self, item) -> FileAttributes:
        if isinstance(item, BlobPrefix):
            return FileAttributes(
                path=self._resolver.relative_path(item.name.rstrip("/")),
                type="dir",
            )
        return FileAttributes(
            path=self._resolver.relative_path(item.name),
            size=item.size,
            last_modified=item.last_modified,
            mime_type=_content_type(item),
        )


def _content_type(properties) -> str | None:
    settings = properties.content_settings
    return settings.content_type if settings else None
