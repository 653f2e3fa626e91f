"""Shared fixtures for storage unit tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from uploads_fs.storage.api_client import FilesApiClient
from uploads_fs.storage.exceptions import NotFoundError
from uploads_fs.storage.filesystem import RoutedFileSystem
from uploads_fs.storage.local import LocalTransport

API_BASE_URL = "https://files.example.com"
SITE_ID = 123456
ACCESS_TOKEN = "super-sekret-token"
UPLOADS_ROOT = "/srv/www/wp-content/uploads"

Responder = Callable[[httpx.Request], httpx.Response]


class RecordingHandler:
    """httpx.MockTransport handler that records requests.

    Returns the configured response, or calls it when it is a callable
    (which may raise an httpx exception to simulate transport failure).
    """

    def __init__(self, response: httpx.Response | Responder | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self.response = response if response is not None else httpx.Response(200)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if callable(self.response):
            return self.response(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class InMemoryTransport:
    """Fake uploads transport keeping files in a dict."""

    def __init__(self, files: dict[str, bytes] | None = None) -> None:
        self.files: dict[str, bytes] = dict(files or {})
        self.writes: list[str] = []
        self.fail_writes = False
        self.fail_deletes = False

    def get_contents(self, path: str) -> bytes:
        if path not in self.files:
            raise NotFoundError(path)
        return self.files[path]

    def get_contents_as_lines(self, path: str) -> list[bytes]:
        return self.get_contents(path).splitlines(keepends=True)

    def put_contents(self, path: str, contents: bytes | str, mode: int | None = None) -> bool:
        if self.fail_writes:
            return False
        if isinstance(contents, str):
            contents = contents.encode("utf-8")
        self.files[path] = contents
        self.writes.append(path)
        return True

    def delete(self, path: str) -> bool:
        if self.fail_deletes or path not in self.files:
            return False
        del self.files[path]
        return True

    def size(self, path: str) -> int:
        return len(self.get_contents(path))

    def exists(self, path: str) -> bool:
        return path in self.files

    def is_file(self, path: str) -> bool:
        return path in self.files

    def is_dir(self, path: str) -> bool:
        return False

    def is_readable(self, path: str) -> bool:
        return path in self.files

    def is_writable(self, path: str) -> bool:
        return True


@pytest.fixture
def handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def api_client(handler: RecordingHandler) -> Iterator[FilesApiClient]:
    """FilesApiClient whose requests are answered by the recording handler."""
    client = FilesApiClient(
        API_BASE_URL,
        SITE_ID,
        ACCESS_TOKEN,
        transport=httpx.MockTransport(handler),
    )
    yield client
    client.close()


@pytest.fixture
def upload_fixture(tmp_path: Path) -> Path:
    """A 13-byte JPEG-named file to upload."""
    path = tmp_path / "upload.jpg"
    path.write_bytes(b"not-a-real-jp")
    return path


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def uploads() -> InMemoryTransport:
    return InMemoryTransport()


@pytest.fixture
def fs(temp_root: Path, uploads: InMemoryTransport) -> RoutedFileSystem:
    """RoutedFileSystem over an in-memory uploads transport and real local disk."""
    return RoutedFileSystem(
        uploads_root=UPLOADS_ROOT,
        temp_root=str(temp_root),
        uploads_transport=uploads,
        local_transport=LocalTransport(),
    )
