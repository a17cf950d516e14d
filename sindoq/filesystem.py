"""File system abstraction for sandbox environments."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import BinaryIO, Callable, Iterator, List, Optional, Tuple


@dataclass
class FileInfo:
    """Metadata about a file inside a sandbox."""

    name: str
    path: str
    size: int = 0
    is_dir: bool = False
    mod_time: Optional[datetime] = None
    mode: int = 0
    mime_type: str = ""


class WatchEventType(str, enum.Enum):
    """Kinds of file system changes."""

    CREATE = "create"
    MODIFY = "modify"
    DELETE = "delete"
    RENAME = "rename"


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class WatchEvent:
    """A file system change; old_path is set for renames."""

    type: WatchEventType
    path: str
    old_path: str = ""
    timestamp: datetime = field(default_factory=_now)


class FileSystem(ABC):
    """File operations within a sandbox."""

    @abstractmethod
    def read(self, path: str) -> bytes:
        """Return the contents of a file."""

    @abstractmethod
    def write(self, path: str, data: bytes) -> None:
        """Write data to a file."""

    @abstractmethod
    def delete(self, path: str) -> None:
        """Remove a file or directory."""

    @abstractmethod
    def list(self, path: str) -> List[FileInfo]:
        """List the entries of a directory."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Tell whether a path exists."""

    @abstractmethod
    def stat(self, path: str) -> FileInfo:
        """Return information about a path."""

    @abstractmethod
    def upload(self, local_path: str, remote_path: str) -> None:
        """Copy a local file into the sandbox."""

    @abstractmethod
    def upload_reader(self, reader: BinaryIO, remote_path: str) -> None:
        """Copy the content of a binary reader into the sandbox."""

    @abstractmethod
    def download(self, remote_path: str, writer: BinaryIO) -> None:
        """Copy a sandbox file into a binary writer."""

    @abstractmethod
    def mkdir(self, path: str) -> None:
        """Create a directory, including its parents."""

    @abstractmethod
    def copy(self, src: str, dst: str) -> None:
        """Copy a file within the sandbox."""

    @abstractmethod
    def move(self, src: str, dst: str) -> None:
        """Move or rename a file within the sandbox."""


class Watcher(ABC):
    """Watches paths for changes."""

    @abstractmethod
    def watch(self, path: str) -> Tuple[Iterator[WatchEvent], Callable[[], None]]:
        """Start watching a path; return an event iterator and a function that stops watching."""


class WatchableFileSystem(FileSystem, Watcher, ABC):
    """A file system that can also be watched."""