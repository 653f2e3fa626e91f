"""Startup validation for the routed filesystem configuration.

Provides validate_files_config() which is called lazily by the factory
functions in uploads_fs.storage, not at import time.
"""

from __future__ import annotations

import logging
import os
from urllib.parse import urlparse

from uploads_fs.core.config import Settings
from uploads_fs.storage.exceptions import ConfigurationError
from uploads_fs.storage.path_resolver import is_under_root, normalize_root

logger = logging.getLogger(__name__)


def validate_files_config(settings: Settings) -> None:
    """Validate files API and namespace configuration.

    Args:
        settings: Application settings.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    _validate_api_config(settings)
    _validate_roots(settings)


def _validate_api_config(settings: Settings) -> None:
    """Validate the remote files API connection settings.

    Raises:
        ConfigurationError: If the base URL, site ID or token is unusable.
    """
    base_url = settings.files_api_base_url
    if not base_url:
        raise ConfigurationError(
            "FILES_API_BASE_URL",
            "Files API base URL is required. "
            "Set FILES_API_BASE_URL=https://files.example.com",
        )

    parsed = urlparse(base_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigurationError(
            "FILES_API_BASE_URL",
            f"Files API base URL must be an http(s) URL: {base_url}",
        )
    if parsed.scheme == "http":
        logger.warning(
            "Files API base URL uses plain http; the access token is sent unencrypted: %s",
            base_url,
        )

    if not settings.files_site_id:
        raise ConfigurationError(
            "FILES_SITE_ID",
            "Site ID is required and must be a positive integer.",
        )
    if not settings.files_access_token:
        raise ConfigurationError(
            "FILES_ACCESS_TOKEN",
            "Access token is required to authenticate with the files API.",
        )


def _validate_roots(settings: Settings) -> None:
    """Validate the uploads and temp roots.

    Raises:
        ConfigurationError: If a root is missing, relative, or the two overlap.
    """
    try:
        uploads_root = normalize_root(settings.uploads_root)
    except ValueError as e:
        raise ConfigurationError("UPLOADS_ROOT", str(e)) from e

    try:
        temp_root = normalize_root(settings.temp_root)
    except ValueError as e:
        raise ConfigurationError("TEMP_ROOT", str(e)) from e

    # Prefix routing cannot tell overlapping roots apart.
    if is_under_root(uploads_root, temp_root) or is_under_root(temp_root, uploads_root):
        raise ConfigurationError(
            "UPLOADS_ROOT",
            f"Uploads root {uploads_root} and temp root {temp_root} must not overlap",
        )

    if not os.path.isdir(temp_root):
        logger.warning("Temp root %s does not exist or is not a directory", temp_root)
