"""Transport protocol and namespace types.

A transport performs filesystem primitives for the paths of one namespace.
RoutedFileSystem picks the transport per call from the path prefix:

    uploads root -> UploadsTransport (remote files API)
    temp root    -> LocalTransport   (direct disk I/O)

All paths are absolute local paths, e.g.
"/var/www/wp-content/uploads/2024/05/photo.jpg".
"""

from __future__ import annotations

from enum import Enum
from typing import Protocol, runtime_checkable


class Namespace(str, Enum):
    """Path namespace owned by a transport."""

    UPLOADS = "uploads"
    TEMP = "temp"


@runtime_checkable
class Transport(Protocol):
    """Filesystem primitives implemented by every backend.

    Predicates return bool and never raise for a missing file.
    get_contents and size raise a StorageError subclass when the file
    cannot be read.
    """

    def get_contents(self, path: str) -> bytes:
        """Read the entire file.

        Raises:
            StorageError: If the file cannot be read.
        """
        ...

    def get_contents_as_lines(self, path: str) -> list[bytes]:
        """Read the file into a list of lines, line endings kept."""
        ...

    def put_contents(self, path: str, contents: bytes | str, mode: int | None = None) -> bool:
        """Write contents to the file, replacing it.

        Args:
            path: Destination path.
            contents: Data to write. str is encoded as UTF-8.
            mode: Optional permission bits (e.g. 0o644).

        Returns:
            True on success, False on a recoverable failure.
        """
        ...

    def delete(self, path: str) -> bool:
        """Delete the file. Returns True on success."""
        ...

    def size(self, path: str) -> int:
        """Size of the file in bytes."""
        ...

    def exists(self, path: str) -> bool: ...

    def is_file(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def is_readable(self, path: str) -> bool: ...

    def is_writable(self, path: str) -> bool: ...
