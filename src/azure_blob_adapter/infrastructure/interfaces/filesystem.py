"""Abstract interface for generic filesystem operations."""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from datetime import datetime
from typing import BinaryIO

from azure_blob_adapter.models import FileAttributes


class Filesystem(ABC):
    """Abstract base class for file storage backends.

    Paths are relative to the backend's root; a leading slash is ignored.
    """

    @abstractmethod
    def write(self, path: str, contents: bytes | str, content_type: str | None = None) -> None:
        """
        Writes a file, replacing any existing file at the path.

        Args:
            path: Destination path.
            contents: File contents. Strings are encoded as UTF-8.
            content_type: MIME type. Guessed from the extension when omitted.

        Raises:
            StorageOperationError: If the write fails.
        """
        pass

    @abstractmethod
    def write_stream(self, path: str, stream: BinaryIO, content_type: str | None = None) -> None:
        """
        Writes a file from a readable binary stream.

        Args:
            path: Destination path.
            stream: File-like object containing the data.
            content_type: MIME type. Guessed from the extension when omitted.

        Raises:
            StorageOperationError: If the write fails.
        """
        pass

    @abstractmethod
    def read(self, path: str) -> bytes:
        """
        Reads a whole file.

        Raises:
            StorageObjectNotFoundError: If the file does not exist.
        """
        pass

    @abstractmethod
    def read_stream(self, path: str) -> Iterator[bytes]:
        """
        Reads a file as an iterator of chunks.

        Raises:
            StorageObjectNotFoundError: If the file does not exist.
        """
        pass

    @abstractmethod
    def delete(self, path: str) -> None:
        """
        Deletes a file.

        Raises:
            StorageObjectNotFoundError: If the file does not exist.
        """
        pass

    @abstractmethod
    def delete_directory(self, path: str) -> None:
        """Deletes every file under a directory."""
        pass

    @abstractmethod
    def create_directory(self, path: str) -> None:
        """Creates a directory, where the backend has a notion of one."""
        pass

    @abstractmethod
    def file_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def directory_exists(self, path: str) -> bool:
        pass

    @abstractmethod
    def get_metadata(self, path: str) -> FileAttributes:
        """
        Returns size, modification time and MIME type of a file.

        Raises:
            StorageObjectNotFoundError: If the file does not exist.
        """
        pass

    @abstractmethod
    def list_contents(self, directory: str = "", recursive: bool = False) -> list[FileAttributes]:
        """
        Lists the files and directories under a directory.

        Args:
            directory: Directory to list; the root when empty.
            recursive: Whether to descend into subdirectories.

        Returns:
            Entries with paths relative to the backend's root.
        """
        pass

    @abstractmethod
    def copy(self, source: str, destination: str) -> None:
        pass

    @abstractmethod
    def move(self, source: str, destination: str) -> None:
        pass

    @abstractmethod
    def get_url(self, path: str) -> str:
        """Returns the public URL of a file."""
        pass

    @abstractmethod
    def get_temporary_url(self, path: str, expires_at: datetime) -> str:
        """
        Returns a signed, read-only URL valid until expires_at.

        Raises:
            SigningError: If the backend cannot sign URLs with its credentials.
            InvalidArgumentError: If expires_at is not in the future.
        """
        pass
