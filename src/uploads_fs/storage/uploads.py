"""Transport for the uploads namespace, backed by the remote files API.

Adapts FilesApiClient to the Transport protocol. Local uploads paths are
mapped to API paths with to_api_path() before every call.

The remote service stores flat objects, so there are no directories:
is_dir() is always False and every path under the uploads root is writable.
"""

from __future__ import annotations

import os
import tempfile

from uploads_fs.core.logging import get_logger
from uploads_fs.storage.api_client import FilesApiClient
from uploads_fs.storage.path_resolver import to_api_path

_logger = get_logger(__name__)


class UploadsTransport:
    """Transport implementation over FilesApiClient.

    ApiError and httpx.HTTPError raised by the client propagate unchanged.

    Attributes:
        last_stored_path: API path reported by the server for the most
            recent successful put_contents, or None.
    """

    def __init__(self, api_client: FilesApiClient, site_root: str = "") -> None:
        """Initialize the transport.

        Args:
            api_client: Client for the remote files API.
            site_root: Local prefix stripped from paths before they are sent
                       to the API. Empty means paths are sent as-is.
        """
        self._api = api_client
        self._site_root = site_root.rstrip("/")
        self.last_stored_path: str | None = None

    @property
    def api_client(self) -> FilesApiClient:
        return self._api

    def _api_path(self, path: str) -> str:
        return to_api_path(path, self._site_root)

    def get_contents(self, path: str) -> bytes:
        return self._api.get_file(self._api_path(path))

    def get_contents_as_lines(self, path: str) -> list[bytes]:
        return self.get_contents(path).splitlines(keepends=True)

    def put_contents(self, path: str, contents: bytes | str, mode: int | None = None) -> bool:
        """Upload contents to path.

        The data is staged in a temporary local file which is removed
        afterwards. mode is ignored; the remote service has no permissions.
        """
        if isinstance(contents, str):
            contents = contents.encode("utf-8")

        # Keep the extension so the upload is sent with the right Content-Type.
        suffix = os.path.splitext(path)[1]
        fd, tmp_path = tempfile.mkstemp(prefix="uploads-fs-", suffix=suffix)
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(contents)

            api_path = self._api_path(path)
            stored = self._api.upload_file(tmp_path, api_path)
        finally:
            os.remove(tmp_path)

        if stored != api_path:
            _logger.info("Upload of %s was stored as %s", api_path, stored)
        self.last_stored_path = stored
        return True

    def delete(self, path: str) -> bool:
        return self._api.delete_file(self._api_path(path))

    def size(self, path: str) -> int:
        # The API has no metadata endpoint; size requires fetching the file.
        return len(self.get_contents(path))

    def exists(self, path: str) -> bool:
        return self._api.is_file(self._api_path(path))

    def is_file(self, path: str) -> bool:
        return self._api.is_file(self._api_path(path))

    def is_dir(self, path: str) -> bool:
        return False

    def is_readable(self, path: str) -> bool:
        return self._api.is_file(self._api_path(path))

    def is_writable(self, path: str) -> bool:
        return True
