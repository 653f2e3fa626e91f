"""Routed filesystem over the remote files API and local disk.

Provides factory functions for the API client and filesystem, following
the @lru_cache settings singleton in core/config.py.

Namespaces:
    - uploads root → UploadsTransport → FilesApiClient (remote HTTP)
    - temp root    → LocalTransport (direct disk I/O)

Exports:
    - Transport protocol, Namespace enum
    - Exception hierarchy (StorageError and subclasses)
    - Path utilities
    - validate_files_config() startup validation
    - FilesApiClient, UploadsTransport, LocalTransport, RoutedFileSystem
    - get_api_client() / get_filesystem() factory functions

Usage:
    from uploads_fs.storage import get_filesystem
    fs = get_filesystem()
    fs.copy("/tmp/resized.jpg", "/var/www/wp-content/uploads/2024/resized.jpg")
"""

from __future__ import annotations

from functools import lru_cache

from uploads_fs.storage.api_client import FilesApiClient, calculate_upload_timeout
from uploads_fs.storage.base import Namespace, Transport
from uploads_fs.storage.config_validation import validate_files_config
from uploads_fs.storage.exceptions import (
    ApiError,
    ConfigurationError,
    FatalFileSystemError,
    NotFoundError,
    StorageError,
    UnroutablePathError,
    UnsupportedOperationError,
)
from uploads_fs.storage.filesystem import RoutedFileSystem
from uploads_fs.storage.local import LocalTransport
from uploads_fs.storage.path_resolver import (
    PathResolver,
    build_api_url,
    is_under_root,
    normalize_root,
    to_api_path,
)
from uploads_fs.storage.uploads import UploadsTransport

__all__ = [
    # Protocol & types
    "Transport",
    "Namespace",
    # Exceptions
    "StorageError",
    "NotFoundError",
    "ConfigurationError",
    "ApiError",
    "FatalFileSystemError",
    "UnroutablePathError",
    "UnsupportedOperationError",
    # Path utilities
    "PathResolver",
    "build_api_url",
    "is_under_root",
    "normalize_root",
    "to_api_path",
    # Startup validation
    "validate_files_config",
    # Implementations
    "FilesApiClient",
    "calculate_upload_timeout",
    "UploadsTransport",
    "LocalTransport",
    "RoutedFileSystem",
    # Factory functions
    "get_api_client",
    "get_filesystem",
]


@lru_cache(maxsize=1)
def get_api_client() -> FilesApiClient:
    """Get cached files API client built from settings.

    Returns:
        FilesApiClient (lazy; no request is sent until first use).

    Raises:
        ConfigurationError: If settings are invalid.
    """
    from uploads_fs.core.config import get_settings

    settings = get_settings()
    validate_files_config(settings)

    return FilesApiClient(
        base_url=settings.files_api_base_url,
        site_id=settings.files_site_id,
        access_token=settings.files_access_token,
        timeout=settings.files_request_timeout,
    )


def get_filesystem() -> RoutedFileSystem:
    """Build a routed filesystem from settings.

    NOT cached: each call returns a fresh facade with an empty error list,
    sharing the cached API client underneath.

    Raises:
        ConfigurationError: If settings are invalid.
    """
    from uploads_fs.core.config import get_settings

    api_client = get_api_client()
    settings = get_settings()

    return RoutedFileSystem(
        uploads_root=settings.uploads_root,
        temp_root=settings.temp_root,
        uploads_transport=UploadsTransport(api_client, site_root=settings.uploads_site_root),
        local_transport=LocalTransport(),
        raise_on_fatal=settings.fatal_errors,
    )
