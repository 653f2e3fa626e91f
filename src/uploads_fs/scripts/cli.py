"""CLI utilities using Typer."""

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import httpx
import typer

from uploads_fs.core.logging import configure_logging
from uploads_fs.storage import RoutedFileSystem, StorageError, get_filesystem

app = typer.Typer(help="Routed uploads filesystem CLI")


@app.callback()
def main(
    log_level: str | None = typer.Option(None, "--log-level", help="Override LOG_LEVEL"),
) -> None:
    """Operate on uploads (remote) and temp (local) paths."""
    configure_logging(log_level)


@contextmanager
def _filesystem() -> Iterator[RoutedFileSystem]:
    """Yield the configured filesystem, turning storage failures into exit code 1."""
    try:
        yield get_filesystem()
    except (StorageError, httpx.HTTPError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


def _report(ok: bool, success: str, failure: str) -> None:
    if ok:
        typer.secho(success, fg=typer.colors.GREEN)
    else:
        typer.secho(failure, fg=typer.colors.YELLOW)
        raise typer.Exit(1)


@app.command()
def exists(path: str = typer.Argument(..., help="Absolute path to check")) -> None:
    """Check whether a file exists."""
    with _filesystem() as fs:
        found = fs.exists(path)
    _report(found, f"{path} exists", f"{path} does not exist")


@app.command()
def size(path: str = typer.Argument(..., help="Absolute path of the file")) -> None:
    """Print the size of a file in bytes."""
    with _filesystem() as fs:
        file_size = fs.size(path)
    if file_size is False:
        _report(False, "", f"Could not stat {path}")
        return
    typer.echo(file_size)


@app.command()
def cat(path: str = typer.Argument(..., help="Absolute path of the file")) -> None:
    """Print a file's contents to stdout."""
    with _filesystem() as fs:
        contents = fs.get_contents(path)
    if not isinstance(contents, bytes):
        _report(False, "", f"Could not read {path}")
        return
    typer.echo(contents.decode("utf-8", errors="replace"), nl=False)


@app.command()
def put(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True),
    destination: str = typer.Argument(..., help="Absolute destination path"),
) -> None:
    """Write a local file's contents to destination."""
    with _filesystem() as fs:
        written = fs.put_contents(destination, source.read_bytes())
    _report(written, f"Wrote {destination}", f"Could not write {destination}")


@app.command()
def rm(path: str = typer.Argument(..., help="Absolute path to delete")) -> None:
    """Delete a file."""
    with _filesystem() as fs:
        deleted = fs.delete(path)
    _report(deleted, f"Deleted {path}", f"Could not delete {path}")


@app.command("cp")
def cp(
    source: str = typer.Argument(..., help="Absolute source path"),
    destination: str = typer.Argument(..., help="Absolute destination path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing destination"),
) -> None:
    """Copy a file, possibly between namespaces."""
    with _filesystem() as fs:
        copied = fs.copy(source, destination, overwrite=overwrite)
    _report(
        copied,
        f"Copied {source} -> {destination}",
        f"Not copied: {destination} exists or could not be written",
    )


@app.command("mv")
def mv(
    source: str = typer.Argument(..., help="Absolute source path"),
    destination: str = typer.Argument(..., help="Absolute destination path"),
    overwrite: bool = typer.Option(False, "--overwrite", help="Replace an existing destination"),
) -> None:
    """Move a file, possibly between namespaces."""
    with _filesystem() as fs:
        moved = fs.move(source, destination, overwrite=overwrite)
    _report(
        moved,
        f"Moved {source} -> {destination}",
        f"Not moved: {destination} exists or {source} could not be removed",
    )


if __name__ == "__main__":
    app()
