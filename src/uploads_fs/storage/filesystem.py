"""Routed filesystem facade.

Implements the filesystem operation surface on top of two transports and
picks one per call from the path prefix:

    uploads root -> uploads transport (remote files API)
    temp root    -> local transport (direct disk I/O)

A path under neither root, and any call to an operation this filesystem
does not provide (directories, permissions, ownership, timestamps), is a
misuse. Misuse is recorded in .errors and raised as a FatalFileSystemError
subclass. Callers decide whether that terminates the process.

Primitive operations pass the transport's result or exception through
unchanged. With raise_on_fatal=False an unroutable path makes every
primitive return False, including get_contents and size. Only copy() and
move() combine transports.
"""

from __future__ import annotations

from typing import Any, TypeVar

from uploads_fs.core.logging import get_logger
from uploads_fs.storage.base import Namespace, Transport
from uploads_fs.storage.exceptions import (
    FatalFileSystemError,
    StorageError,
    UnroutablePathError,
    UnsupportedOperationError,
)
from uploads_fs.storage.path_resolver import PathResolver

_T = TypeVar("_T")


class RoutedFileSystem:
    """Filesystem that routes each call to the uploads or local transport.

    Holds the two roots and transports given at construction; the mapping
    from path to transport is recomputed on every call and never cached.

    Usage:
        fs = RoutedFileSystem(
            uploads_root="/var/www/wp-content/uploads",
            temp_root="/tmp",
            uploads_transport=UploadsTransport(api_client),
            local_transport=LocalTransport(),
        )
        fs.copy("/tmp/import.jpg", "/var/www/wp-content/uploads/2024/import.jpg")

    Attributes:
        errors: Fatal errors recorded so far, oldest first.
    """

    def __init__(
        self,
        uploads_root: str,
        temp_root: str,
        uploads_transport: Transport,
        local_transport: Transport,
        raise_on_fatal: bool = True,
    ) -> None:
        """Initialize the facade.

        Args:
            uploads_root: Absolute directory owned by the remote files API.
            temp_root: Absolute directory owned by local disk.
            uploads_transport: Transport for the uploads namespace.
            local_transport: Transport for the temp namespace.
            raise_on_fatal: If False, fatal errors are only recorded and
                            logged, and the operation returns its default.
        """
        self._resolver = PathResolver(uploads_root=uploads_root, temp_root=temp_root)
        self._transports: dict[Namespace, Transport] = {
            Namespace.UPLOADS: uploads_transport,
            Namespace.TEMP: local_transport,
        }
        self._raise_on_fatal = raise_on_fatal
        self.errors: list[StorageError] = []
        self._logger = get_logger(__name__)

    @property
    def resolver(self) -> PathResolver:
        return self._resolver

    # ─── Routing ─────────────────────────────────────────────────────────────

    def get_transport_for_path(self, path: str) -> Transport | None:
        """Select the transport owning path.

        Returns:
            The transport, or None when the path is unroutable and the
            facade was built with raise_on_fatal=False.

        Raises:
            UnroutablePathError: If path is under neither root.
        """
        namespace = self._resolver.resolve(path)
        if namespace is None:
            self._handle_fatal(UnroutablePathError(path), None)
            return None
        return self._transports[namespace]

    def _dispatch(self, operation: str, path: str, *args: Any) -> Any:
        transport = self.get_transport_for_path(path)
        if transport is None:
            return False
        return getattr(transport, operation)(path, *args)

    # ─── Primitive operations (pass-through) ─────────────────────────────────

    def get_contents(self, path: str) -> bytes | bool:
        """Read the entire file."""
        return self._dispatch("get_contents", path)

    def get_contents_as_lines(self, path: str) -> list[bytes] | bool:
        """Read the file into a list of lines."""
        return self._dispatch("get_contents_as_lines", path)

    def put_contents(self, path: str, contents: bytes | str, mode: int | None = None) -> bool:
        """Write contents to the file.

        Args:
            path: Destination path.
            contents: Data to write.
            mode: Permission bits. Only honoured by the local transport.
        """
        return self._dispatch("put_contents", path, contents, mode)

    def delete(self, path: str, recursive: bool = False) -> bool:
        """Delete a file. recursive is accepted for compatibility and ignored."""
        return self._dispatch("delete", path)

    def size(self, path: str) -> int | bool:
        return self._dispatch("size", path)

    def exists(self, path: str) -> bool:
        return self._dispatch("exists", path)

    def is_file(self, path: str) -> bool:
        return self._dispatch("is_file", path)

    def is_dir(self, path: str) -> bool:
        return self._dispatch("is_dir", path)

    def is_readable(self, path: str) -> bool:
        return self._dispatch("is_readable", path)

    def is_writable(self, path: str) -> bool:
        return self._dispatch("is_writable", path)

    # ─── Composite operations ────────────────────────────────────────────────

    def copy(self, source: str, destination: str, overwrite: bool = False) -> bool:
        """Copy a file, possibly between namespaces.

        Args:
            source: Path to read.
            destination: Path to write.
            overwrite: If False and destination exists, nothing is copied.

        Returns:
            False if the destination exists and overwrite is False, or if the
            destination write reports failure. True otherwise.
        """
        source_transport = self.get_transport_for_path(source)
        destination_transport = self.get_transport_for_path(destination)
        if source_transport is None or destination_transport is None:
            return False

        if not overwrite and destination_transport.exists(destination):
            self._logger.debug("Not copying %s: %s already exists", source, destination)
            return False

        contents = source_transport.get_contents(source)
        if not destination_transport.put_contents(destination, contents):
            self._logger.warning("Copy of %s to %s failed while writing", source, destination)
            return False
        return True

    def move(self, source: str, destination: str, overwrite: bool = False) -> bool:
        """Copy a file then delete the source.

        The source is left untouched when the copy fails.

        Returns:
            False if the copy failed or the source could not be deleted.
        """
        if not self.copy(source, destination, overwrite):
            return False

        if not self.delete(source):
            self._logger.warning(
                "Copied %s to %s but could not delete the source", source, destination
            )
            return False
        return True

    # ─── Unsupported operations ──────────────────────────────────────────────

    def mkdir(
        self,
        path: str,
        chmod: int | None = None,
        chown: str | int | None = None,
        chgrp: str | int | None = None,
    ) -> bool:
        return self._handle_unsupported("mkdir", False)

    def rmdir(self, path: str, recursive: bool = False) -> bool:
        return self._handle_unsupported("rmdir", False)

    def dirlist(self, path: str, include_hidden: bool = True, recursive: bool = False) -> Any:
        return self._handle_unsupported("dirlist", False)

    def cwd(self) -> str | bool:
        return self._handle_unsupported("cwd", False)

    def chdir(self, directory: str) -> bool:
        return self._handle_unsupported("chdir", False)

    def chgrp(self, path: str, group: str | int, recursive: bool = False) -> bool:
        return self._handle_unsupported("chgrp", False)

    def chmod(self, path: str, mode: int | None = None, recursive: bool = False) -> bool:
        return self._handle_unsupported("chmod", False)

    def chown(self, path: str, owner: str | int, recursive: bool = False) -> bool:
        return self._handle_unsupported("chown", False)

    def owner(self, path: str) -> str | bool:
        return self._handle_unsupported("owner", False)

    def getchmod(self, path: str) -> str:
        return self._handle_unsupported("getchmod", "")

    def group(self, path: str) -> str | bool:
        return self._handle_unsupported("group", False)

    def atime(self, path: str) -> int | bool:
        return self._handle_unsupported("atime", False)

    def mtime(self, path: str) -> int | bool:
        return self._handle_unsupported("mtime", False)

    def touch(self, path: str, time: int = 0, atime: int = 0) -> bool:
        return self._handle_unsupported("touch", False)

    # ─── Fatal error handling ────────────────────────────────────────────────

    def _handle_unsupported(self, method: str, default: _T) -> _T:
        return self._handle_fatal(UnsupportedOperationError(method), default)

    def _handle_fatal(self, error: FatalFileSystemError, default: _T) -> _T:
        """Record a fatal error, then raise it unless raise_on_fatal is False."""
        self.errors.append(error)
        self._logger.error("[%s] %s", error.code, error.message)
        if self._raise_on_fatal:
            raise error
        return default
