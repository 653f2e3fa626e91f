"""HTTP client for the remote files API.

Every request is authenticated with the X-Client-Site-ID and X-Access-Token
headers and targets ``base_url + path``. Response codes are translated to
ApiError here and nowhere else.

Error Translation:
    is_file      GET     200 -> True, 404 -> False, other -> is_file-failed
    delete_file  DELETE  200 -> True, other -> delete_file-failed
    get_file     GET     200 -> body bytes, other -> get_file-failed
    upload_file  PUT     200 -> JSON "filename", 204 -> quota_reached,
                         bad JSON -> json_decode-error, other -> upload_file-failed

httpx.HTTPError (connection, DNS, timeout) is not caught and reaches the
caller unchanged. No request is retried.

Lazy Initialization:
- No network activity at __init__ time.
- The httpx.Client is built on first use via the .client property.
"""

from __future__ import annotations

import json
import mimetypes
import os
from typing import Any

import httpx

from uploads_fs.core.logging import get_logger
from uploads_fs.storage.exceptions import ApiError
from uploads_fs.storage.path_resolver import build_api_url

# Bytes per second of upload allowance on top of the base timeout.
UPLOAD_BYTES_PER_SECOND = 512000


def calculate_upload_timeout(file_size: int) -> int:
    """Timeout in seconds for uploading a file of file_size bytes.

    A 10 second floor plus one second per 500 KB:

        0 B -> 10s, 1 KB -> 10s, 500 KB -> 11s, 1 GB -> 2107s

    Args:
        file_size: Size of the file in bytes.

    Returns:
        Timeout in whole seconds, non-decreasing in file_size.
    """
    return FilesApiClient.DEFAULT_TIMEOUT + max(file_size, 0) // UPLOAD_BYTES_PER_SECOND


class FilesApiClient:
    """Client for the remote files API.

    Holds only immutable configuration plus the underlying connection pool;
    no request state is kept between calls. Use one instance per request
    context.

    Usage:
        client = FilesApiClient("https://files.example.com", 123456, "token")
        if not client.is_file("/wp-content/uploads/a.jpg"):
            stored = client.upload_file("/tmp/a.jpg", "/wp-content/uploads/a.jpg")
    """

    DEFAULT_TIMEOUT = 10
    DEFAULT_MIME_TYPE = "application/octet-stream"

    def __init__(
        self,
        base_url: str,
        site_id: int,
        access_token: str,
        timeout: int = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Files API base URL, e.g. "https://files.example.com".
            site_id: Numeric site identifier.
            access_token: Secret token sent with every request.
            timeout: Timeout in seconds for non-upload requests.
            transport: Optional httpx transport (e.g. httpx.MockTransport).
        """
        if not base_url:
            raise ValueError("base_url must be non-empty")

        self._base_url = base_url
        self._site_id = site_id
        self._access_token = access_token
        self._timeout = timeout
        self._transport = transport

        self._client: httpx.Client | None = None
        self._logger = get_logger(__name__)

    # ─── Lazy-initialization properties ──────────────────────────────────────

    @property
    def client(self) -> httpx.Client:
        """Lazily build and return the underlying httpx.Client."""
        if self._client is None:
            self._client = httpx.Client(transport=self._transport)
        return self._client

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def site_id(self) -> int:
        return self._site_id

    def close(self) -> None:
        """Close the connection pool, if one was opened."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> FilesApiClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ─── Request helpers ─────────────────────────────────────────────────────

    def get_api_url(self, path: str) -> str:
        """Return the request URL for path."""
        return build_api_url(self._base_url, path)

    def _get_headers(self, headers: dict[str, str] | None = None) -> httpx.Headers:
        """Auth headers merged with caller headers; caller headers win.

        Header names compare case-insensitively.
        """
        merged = httpx.Headers(
            {
                "X-Client-Site-ID": str(self._site_id),
                "X-Access-Token": self._access_token,
            }
        )
        if headers is not None:
            merged.update(headers)
        return merged

    def _call_api(
        self,
        path: str,
        method: str,
        *,
        headers: dict[str, str] | None = None,
        content: bytes | None = None,
        timeout: int | None = None,
    ) -> httpx.Response:
        """Send one authenticated request.

        Args:
            path: File path appended to the base URL.
            method: HTTP method.
            headers: Extra headers, merged over the auth headers.
            content: Optional request body.
            timeout: Timeout in seconds. Defaults to the client timeout.

        Returns:
            The httpx.Response, whatever its status code.

        Raises:
            httpx.HTTPError: On transport failure (propagated unchanged).
        """
        request_timeout = timeout if timeout is not None else self._timeout
        url = self.get_api_url(path)

        self._logger.debug("%s %s (timeout=%ss)", method, url, request_timeout)

        response = self.client.request(
            method,
            url,
            headers=self._get_headers(headers),
            content=content,
            timeout=request_timeout,
        )

        self._logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    # ─── Remote operations ───────────────────────────────────────────────────

    def is_file(self, path: str) -> bool:
        """Check whether a file exists on the remote service.

        Returns False (not raises) for 404.

        Raises:
            ApiError: is_file-failed for any status other than 200/404.
        """
        response = self._call_api(path, "GET", headers={"X-Action": "file_exists"})

        if response.status_code == 404:
            return False
        if response.status_code != 200:
            raise ApiError(
                "is_file-failed",
                f"Failed to check if file `{path}` exists "
                f"(response code: {response.status_code})",
                status_code=response.status_code,
            )
        return True

    def delete_file(self, path: str) -> bool:
        """Delete a file on the remote service.

        Raises:
            ApiError: delete_file-failed for any status other than 200.
        """
        response = self._call_api(path, "DELETE")

        if response.status_code != 200:
            raise ApiError(
                "delete_file-failed",
                f"Failed to delete file `{path}` (response code: {response.status_code})",
                status_code=response.status_code,
            )

        self._logger.info("Deleted remote file %s", path)
        return True

    def get_file(self, path: str) -> bytes:
        """Fetch a file's contents from the remote service.

        Returns:
            The response body. May be empty.

        Raises:
            ApiError: get_file-failed for any status other than 200 (incl. 404).
        """
        response = self._call_api(path, "GET")

        if response.status_code != 200:
            raise ApiError(
                "get_file-failed",
                f"Failed to get file `{path}` (response code: {response.status_code})",
                status_code=response.status_code,
            )
        return response.content

    def upload_file(self, local_path: str, upload_path: str) -> str:
        """Upload a local file to the remote service.

        The whole file is read into memory. The request timeout grows with
        the file size (see calculate_upload_timeout).

        Args:
            local_path: Readable file on local disk.
            upload_path: Requested remote path.

        Returns:
            The stored path reported by the server. It may differ from
            upload_path; callers must use the returned value.

        Raises:
            ApiError: upload_file-failed-invalid_path if local_path is not a
                      readable file (no request is sent),
                      upload_file-failed-quota_reached on 204,
                      upload_file-failed on other non-200 statuses or a
                      response without a filename,
                      upload_file-failed-json_decode-error on an invalid body.
        """
        if not os.path.isfile(local_path) or not os.access(local_path, os.R_OK):
            raise ApiError(
                "upload_file-failed-invalid_path",
                f"Failed to upload file `{local_path}` to `{upload_path}`; "
                "the file is not readable.",
            )

        file_size = os.path.getsize(local_path)
        timeout = calculate_upload_timeout(file_size)
        mime_type = mimetypes.guess_type(local_path)[0] or self.DEFAULT_MIME_TYPE

        with open(local_path, "rb") as f:
            content = f.read()

        response = self._call_api(
            upload_path,
            "PUT",
            headers={
                "Content-Type": mime_type,
                "Content-Length": str(file_size),
                "Connection": "Keep-Alive",
            },
            content=content,
            timeout=timeout,
        )

        if response.status_code == 204:
            raise ApiError(
                "upload_file-failed-quota_reached",
                "The file upload failed because your site has reached its storage quota.",
                status_code=204,
            )
        if response.status_code != 200:
            raise ApiError(
                "upload_file-failed",
                f"Failed to upload file `{upload_path}` "
                f"(response code: {response.status_code})",
                status_code=response.status_code,
            )

        try:
            body: Any = json.loads(response.content)
        except ValueError as e:  # JSONDecodeError or UnicodeDecodeError
            raise ApiError(
                "upload_file-failed-json_decode-error",
                f"Failed to decode the upload response for `{upload_path}`: {e}",
                status_code=200,
            ) from e

        filename = body.get("filename") if isinstance(body, dict) else None
        if not isinstance(filename, str):
            raise ApiError(
                "upload_file-failed",
                f"Upload response for `{upload_path}` did not include a filename",
                status_code=200,
            )

        self._logger.info(
            "Uploaded %s (%d bytes, %s) as %s", local_path, file_size, mime_type, filename
        )
        return filename
