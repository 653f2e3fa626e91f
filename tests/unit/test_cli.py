"""Tests for the uploads-fs CLI commands."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx
import pytest
from typer.testing import CliRunner

from uploads_fs.scripts.cli import app
from uploads_fs.storage import LocalTransport, RoutedFileSystem
from uploads_fs.storage.exceptions import ApiError, ConfigurationError

runner = CliRunner()

UPLOADS_ROOT = "/srv/www/wp-content/uploads"
UPLOAD_FILE = UPLOADS_ROOT + "/2024/05/photo.jpg"


@pytest.fixture
def mock_uploads():
    """Uploads transport double."""
    return MagicMock(name="uploads_transport")


@pytest.fixture
def filesystem(tmp_path, mock_uploads):
    """Routed filesystem over mocked uploads and a real temp directory."""
    fs = RoutedFileSystem(
        uploads_root=UPLOADS_ROOT,
        temp_root=str(tmp_path),
        uploads_transport=mock_uploads,
        local_transport=LocalTransport(),
    )
    with patch("uploads_fs.scripts.cli.get_filesystem", return_value=fs):
        yield fs


def test_exists_found(filesystem, mock_uploads):
    mock_uploads.exists.return_value = True

    result = runner.invoke(app, ["exists", UPLOAD_FILE])

    assert result.exit_code == 0
    assert f"{UPLOAD_FILE} exists" in result.output
    mock_uploads.exists.assert_called_once_with(UPLOAD_FILE)


def test_exists_missing_exits_1(filesystem, mock_uploads):
    mock_uploads.exists.return_value = False

    result = runner.invoke(app, ["exists", UPLOAD_FILE])

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_size(filesystem, tmp_path):
    (tmp_path / "a.txt").write_bytes(b"12345")

    result = runner.invoke(app, ["size", str(tmp_path / "a.txt")])

    assert result.exit_code == 0
    assert result.output.strip() == "5"


def test_cat(filesystem, mock_uploads):
    mock_uploads.get_contents.return_value = b"hello\nworld\n"

    result = runner.invoke(app, ["cat", UPLOAD_FILE])

    assert result.exit_code == 0
    assert result.output == "hello\nworld\n"


def test_put(filesystem, mock_uploads, tmp_path):
    source = tmp_path / "local.jpg"
    source.write_bytes(b"jpeg")
    mock_uploads.put_contents.return_value = True

    result = runner.invoke(app, ["put", str(source), UPLOAD_FILE])

    assert result.exit_code == 0
    assert f"Wrote {UPLOAD_FILE}" in result.output
    mock_uploads.put_contents.assert_called_once_with(UPLOAD_FILE, b"jpeg", None)


def test_put_missing_source_is_usage_error(filesystem, tmp_path):
    result = runner.invoke(app, ["put", str(tmp_path / "missing.jpg"), UPLOAD_FILE])

    assert result.exit_code == 2


def test_rm(filesystem, tmp_path):
    target = tmp_path / "gone.txt"
    target.write_bytes(b"x")

    result = runner.invoke(app, ["rm", str(target)])

    assert result.exit_code == 0
    assert not target.exists()


def test_cp_refuses_existing_destination(filesystem, mock_uploads, tmp_path):
    source = tmp_path / "a.jpg"
    source.write_bytes(b"jpeg")
    mock_uploads.exists.return_value = True

    result = runner.invoke(app, ["cp", str(source), UPLOAD_FILE])

    assert result.exit_code == 1
    assert "Not copied" in result.output
    mock_uploads.put_contents.assert_not_called()


def test_cp_with_overwrite(filesystem, mock_uploads, tmp_path):
    source = tmp_path / "a.jpg"
    source.write_bytes(b"jpeg")
    mock_uploads.exists.return_value = True
    mock_uploads.put_contents.return_value = True

    result = runner.invoke(app, ["cp", "--overwrite", str(source), UPLOAD_FILE])

    assert result.exit_code == 0
    mock_uploads.put_contents.assert_called_once_with(UPLOAD_FILE, b"jpeg")


def test_mv_removes_source(filesystem, mock_uploads, tmp_path):
    source = tmp_path / "a.jpg"
    source.write_bytes(b"jpeg")
    mock_uploads.exists.return_value = False
    mock_uploads.put_contents.return_value = True

    result = runner.invoke(app, ["mv", str(source), UPLOAD_FILE])

    assert result.exit_code == 0
    assert "Moved" in result.output
    assert not source.exists()


def test_unroutable_path_exits_1(filesystem):
    result = runner.invoke(app, ["exists", "/etc/passwd"])

    assert result.exit_code == 1
    assert "No appropriate transport found for filename: /etc/passwd" in result.output
    assert len(filesystem.errors) == 1


def test_api_error_exits_1(filesystem, mock_uploads):
    mock_uploads.get_contents.side_effect = ApiError(
        "get_file-failed", "Failed to get file `/a.jpg` (response code: 404)", 404
    )

    result = runner.invoke(app, ["cat", UPLOAD_FILE])

    assert result.exit_code == 1
    assert "response code: 404" in result.output


def test_http_error_exits_1(filesystem, mock_uploads):
    mock_uploads.exists.side_effect = httpx.ConnectError("connection refused")

    result = runner.invoke(app, ["exists", UPLOAD_FILE])

    assert result.exit_code == 1
    assert "connection refused" in result.output


@pytest.mark.parametrize("command", ["cat", "size"])
def test_unroutable_path_non_fatal_exits_1(tmp_path, mock_uploads, command):
    fs = RoutedFileSystem(
        uploads_root=UPLOADS_ROOT,
        temp_root=str(tmp_path),
        uploads_transport=mock_uploads,
        local_transport=LocalTransport(),
        raise_on_fatal=False,
    )
    with patch("uploads_fs.scripts.cli.get_filesystem", return_value=fs):
        result = runner.invoke(app, [command, "/etc/passwd"])

    assert result.exit_code == 1
    assert "/etc/passwd" in result.output
    assert len(fs.errors) == 1


def test_configuration_error_exits_1():
    error = ConfigurationError("FILES_API_BASE_URL", "Files API base URL is required.")
    with patch("uploads_fs.scripts.cli.get_filesystem", side_effect=error):
        result = runner.invoke(app, ["exists", UPLOAD_FILE])

    assert result.exit_code == 1
    assert "FILES_API_BASE_URL" in result.output


def test_log_level_option(filesystem, mock_uploads):
    mock_uploads.exists.return_value = True

    with patch("uploads_fs.scripts.cli.configure_logging") as mock_configure:
        result = runner.invoke(app, ["--log-level", "DEBUG", "exists", UPLOAD_FILE])

    assert result.exit_code == 0
    mock_configure.assert_called_once_with("DEBUG")


def test_help_lists_commands():
    result = runner.invoke(app, ["--help"])

    assert result.exit_code == 0
    for command in ("exists", "size", "cat", "put", "rm", "cp", "mv"):
        assert command in result.output
