"""Path normalization and namespace resolution.

This module provides:

1. build_api_url(): Pure function joining an API base URL and a path
2. normalize_root(): Pure function normalizing a configured root directory
3. to_api_path(): Pure function mapping a local uploads path to an API path
4. is_under_root(): Segment-aware containment test for a normalized root
5. PathResolver: Prefix classifier deciding which namespace owns a path

Resolution Example:
    uploads_root = "/var/www/wp-content/uploads"
    temp_root    = "/tmp"

    "/var/www/wp-content/uploads/2024/photo.jpg" -> Namespace.UPLOADS
    "/tmp/import-1234.csv"                       -> Namespace.TEMP
    "/etc/passwd"                                -> None (unroutable)

Matching is segment-aware: a path belongs to a root only if it is the root
itself or lies below it, so with uploads_root "/srv/uploads" the path
"/srv/uploads-old/a.txt" is unroutable. Roots must be normalized absolute
directories and must not overlap.
"""

from __future__ import annotations

from uploads_fs.storage.base import Namespace


def build_api_url(base_url: str, path: str) -> str:
    """Join an API base URL and a file path with exactly one slash.

    Examples:
        build_api_url("https://files.example.com", "/a/b.jpg")
            -> "https://files.example.com/a/b.jpg"
        build_api_url("https://files.example.com/", "a/b.jpg")
            -> "https://files.example.com/a/b.jpg"

    Args:
        base_url: Scheme and host of the files API, optionally with a path.
        path: File path with or without a leading slash.

    Returns:
        The request URL.
    """
    return base_url.rstrip("/") + "/" + path.lstrip("/")


def normalize_root(root: str) -> str:
    """Normalize a configured root directory.

    Rules:
    - Collapse multiple slashes: "//tmp///x" -> "/tmp/x"
    - Remove trailing slash: "/tmp/" -> "/tmp"
    - "/" remains as root

    Args:
        root: Absolute directory path.

    Returns:
        Normalized root.

    Raises:
        ValueError: If root is empty or not absolute.
    """
    if not root or not root.strip():
        raise ValueError("Root directory must not be empty")
    if not root.startswith("/"):
        raise ValueError(f"Root directory must be absolute: '{root}'")

    segments = [s for s in root.split("/") if s]
    if not segments:
        return "/"
    return "/" + "/".join(segments)


def to_api_path(path: str, site_root: str = "") -> str:
    """Map a local uploads path to the path the files API expects.

    The site root prefix, when configured, is removed so that
    "/var/www/wp-content/uploads/a.jpg" with site root "/var/www" becomes
    "/wp-content/uploads/a.jpg". The result always has a leading slash.
    """
    site_root = site_root.rstrip("/")
    if site_root and is_under_root(path, site_root):
        path = path[len(site_root) :]
    return "/" + path.lstrip("/")


def is_under_root(path: str, root: str) -> bool:
    """True if path is root itself or a path below it.

    root must already be normalized (see normalize_root).
    """
    if root == "/":
        return path.startswith("/")
    return path == root or path.startswith(root + "/")


class PathResolver:
    """Classifies absolute paths into the uploads or temp namespace.

    Holds only the two normalized roots. Stateless between calls, so a
    resolver may be shared freely.

    Usage:
        resolver = PathResolver(uploads_root="/srv/uploads", temp_root="/tmp")
        resolver.resolve("/srv/uploads/a.jpg")  # Namespace.UPLOADS
    """

    def __init__(self, uploads_root: str, temp_root: str) -> None:
        """Initialize the resolver.

        Args:
            uploads_root: Absolute directory owned by the remote files API.
            temp_root: Absolute directory owned by local disk.

        Raises:
            ValueError: If either root is empty or relative.
        """
        self._uploads_root = normalize_root(uploads_root)
        self._temp_root = normalize_root(temp_root)

    @property
    def uploads_root(self) -> str:
        """The normalized uploads root."""
        return self._uploads_root

    @property
    def temp_root(self) -> str:
        """The normalized temp root."""
        return self._temp_root

    def is_uploads_path(self, path: str) -> bool:
        return is_under_root(path, self._uploads_root)

    def is_temp_path(self, path: str) -> bool:
        return is_under_root(path, self._temp_root)

    def resolve(self, path: str) -> Namespace | None:
        """Return the namespace owning path, or None if neither root matches.

        The uploads root is checked first.
        """
        if self.is_uploads_path(path):
            return Namespace.UPLOADS
        if self.is_temp_path(path):
            return Namespace.TEMP
        return None
