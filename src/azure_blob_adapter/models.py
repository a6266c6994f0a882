"""Domain models returned by filesystem operations."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class FileAttributes(BaseModel, frozen=True):
    """Metadata of a file or directory, with the path relative to the key prefix."""

    path: str
    type: Literal["file", "dir"] = "file"
    size: int | None = None
    last_modified: datetime | None = None
    mime_type: str | None = None

    @property
    def is_file(self) -> bool:
        return self.type == "file"
