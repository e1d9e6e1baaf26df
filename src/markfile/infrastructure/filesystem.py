"""Thin filesystem wrappers: path resolution, raw reads, raw writes.

The load/save pipeline never touches the disk directly; it goes through
these functions so that ``OSError`` is translated into the pipeline's
error kinds in one place.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from markfile.errors import IoError, PathError

logger = logging.getLogger(__name__)

MARKDOWN_EXTENSIONS: frozenset[str] = frozenset(
    {
        "markdown",
        "mdown",
        "mkdn",
        "md",
        "mkd",
        "mdwn",
        "mdtxt",
        "mdtext",
        "mdx",
        "text",
        "txt",
    }
)

StrPath = str | os.PathLike[str]


@dataclass(frozen=True)
class ResolvedPath:
    """A resolved Markdown file or directory."""

    path: Path
    is_dir: bool


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def has_markdown_extension(pathname: StrPath) -> bool:
    """Whether *pathname* carries one of :data:`MARKDOWN_EXTENSIONS`."""
    return Path(pathname).suffix.lower().lstrip(".") in MARKDOWN_EXTENSIONS


def is_markdown_file(pathname: StrPath) -> bool:
    """Whether *pathname* is an existing file with a Markdown extension."""
    return Path(pathname).is_file() and has_markdown_extension(pathname)


def normalize_and_resolve_path(pathname: StrPath) -> Path | None:
    """Return the absolute path of *pathname*, following a symlink one hop.

    Returns None for an empty path or a link whose target does not exist.
    """
    raw = os.fspath(pathname)
    if not raw:
        return None

    link = Path(raw)
    if link.is_symlink():
        target = link.parent / link.readlink()
        if target.is_file() or target.is_dir():
            return Path(os.path.abspath(target))
        logger.error('Cannot resolve link target "%s" (%s).', raw, target)
        return None
    return Path(os.path.abspath(link))


def normalize_markdown_path(pathname: StrPath) -> ResolvedPath | None:
    """Resolve a directory or Markdown file; None for anything else."""
    path = Path(pathname)
    is_dir = path.is_dir()
    if not is_dir and not is_markdown_file(path):
        return None

    resolved = normalize_and_resolve_path(pathname)
    if resolved is None:
        logger.error('Cannot resolve "%s".', pathname)
        return None
    return ResolvedPath(path=resolved, is_dir=is_dir)


# ---------------------------------------------------------------------------
# Raw I/O
# ---------------------------------------------------------------------------


def read_raw_bytes(pathname: StrPath) -> bytes:
    """Read the whole file at *pathname*.

    Raises:
        IoError: The file cannot be read.
    """
    path = Path(os.path.abspath(pathname))
    try:
        return path.read_bytes()
    except OSError as exc:
        msg = f"Cannot read {path}: {exc.strerror or exc}"
        raise IoError(msg) from exc


def write_file(pathname: StrPath | None, data: bytes, extension: str | None = None) -> Path:
    """Write *data* to *pathname*, creating parent directories.

    *extension* is appended unless the path already ends with it.

    Raises:
        PathError: *pathname* is empty.
        IoError: The file cannot be written.
    """
    raw = os.fspath(pathname) if pathname is not None else ""
    if not raw:
        raise PathError("Cannot save file without path.")
    if extension and not raw.endswith(extension):
        raw = f"{raw}{extension}"

    path = Path(raw)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as exc:
        msg = f"Cannot write {path}: {exc.strerror or exc}"
        raise IoError(msg) from exc
    return path
