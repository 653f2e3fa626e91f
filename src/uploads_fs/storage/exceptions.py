"""Exception hierarchy for routed filesystem operations.

All storage exceptions inherit from StorageError.
Remote HTTP status codes and malformed response bodies are translated to
ApiError in FilesApiClient. Transport-level failures from httpx (connection
refused, DNS, timeouts) are never wrapped and reach the caller as
httpx.HTTPError.

Exception Tree:
    StorageError (base)
    +-- NotFoundError               (local file missing)
    +-- ConfigurationError          (invalid config at startup)
    +-- ApiError                    (remote status / body failure, has .code)
    +-- FatalFileSystemError        (misuse, recorded in RoutedFileSystem.errors)
        +-- UnroutablePathError       (path outside uploads and temp roots)
        +-- UnsupportedOperationError (mkdir, chmod, dirlist, ...)
"""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for all storage operations."""

    pass


class NotFoundError(StorageError):
    """Raised when a local file does not exist.

    Attributes:
        path: The path that was not found.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Not found: {path}")


class ConfigurationError(StorageError):
    """Raised when filesystem configuration is invalid.

    Attributes:
        field: The configuration field that is invalid.
        detail: Description of what's wrong.
    """

    def __init__(self, field: str, detail: str) -> None:
        self.field = field
        self.detail = detail
        super().__init__(f"Storage configuration error [{field}]: {detail}")


class ApiError(StorageError):
    """Raised when the remote files API answers with an unexpected response.

    The code is stable and machine-readable, e.g. ``is_file-failed`` or
    ``upload_file-failed-quota_reached``. The message interpolates the path
    and/or HTTP status code.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable description.
        status_code: HTTP status code, or None when no response was involved.
    """

    def __init__(self, code: str, message: str, status_code: int | None = None) -> None:
        self.code = code
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ApiError(code={self.code!r}, message={self.message!r})"


class FatalFileSystemError(StorageError):
    """Base for misuse errors that callers are expected to treat as fatal.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable description.
    """

    code = "fatal"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnroutablePathError(FatalFileSystemError):
    """Raised when a path is in neither the uploads nor the temp namespace.

    Attributes:
        path: The offending path.
    """

    code = "filepath_not_supported"

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No appropriate transport found for filename: {path}")


class UnsupportedOperationError(FatalFileSystemError):
    """Raised when an operation the routed filesystem does not provide is called.

    Attributes:
        method: Name of the unsupported method.
    """

    code = "unimplemented-method"

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(f"The `{method}` method is not implemented and/or not supported.")
