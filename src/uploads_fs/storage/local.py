"""Transport for the temp namespace, backed by direct disk I/O."""

from __future__ import annotations

import os

from uploads_fs.core.logging import get_logger
from uploads_fs.storage.exceptions import NotFoundError


class LocalTransport:
    """Transport implementation over the local file system.

    Reads raise NotFoundError for a missing file. Writes and deletes return
    False and log a warning when the operating system refuses them.
    """

    def __init__(self) -> None:
        self.logger = get_logger(__name__)

    def get_contents(self, path: str) -> bytes:
        try:
            with open(path, "rb") as f:
                return f.read()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise NotFoundError(path) from e

    def get_contents_as_lines(self, path: str) -> list[bytes]:
        return self.get_contents(path).splitlines(keepends=True)

    def put_contents(self, path: str, contents: bytes | str, mode: int | None = None) -> bool:
        """Write contents to path, optionally applying permission bits."""
        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        try:
            with open(path, "wb") as f:
                f.write(contents)
            if mode is not None:
                os.chmod(path, mode)
        except OSError as e:
            self.logger.warning("Could not write %s: %s", path, e)
            return False
        return True

    def delete(self, path: str) -> bool:
        try:
            os.remove(path)
        except OSError as e:
            self.logger.warning("Could not delete %s: %s", path, e)
            return False
        return True

    def size(self, path: str) -> int:
        try:
            return os.stat(path).st_size
        except FileNotFoundError as e:
            raise NotFoundError(path) from e

    def exists(self, path: str) -> bool:
        return os.path.exists(path)

    def is_file(self, path: str) -> bool:
        return os.path.isfile(path)

    def is_dir(self, path: str) -> bool:
        return os.path.isdir(path)

    def is_readable(self, path: str) -> bool:
        return os.access(path, os.R_OK)

    def is_writable(self, path: str) -> bool:
        return os.access(path, os.W_OK)
