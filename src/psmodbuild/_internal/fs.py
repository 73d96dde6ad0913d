"""Filesystem helpers that surface OSError as FileSystemError."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import structlog

from psmodbuild.errors import FileSystemError

if TYPE_CHECKING:
    from pathlib import Path

logger = structlog.get_logger()


def read_text(path: Path) -> str:
    """Read a UTF-8 text file without translating line endings."""
    try:
        with path.open(encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as err:
        raise FileSystemError("read", path, err) from err


def write_text(path: Path, text: str) -> None:
    """Write a UTF-8 text file, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as err:
        raise FileSystemError("write", path, err) from err


def append_text(path: Path, text: str) -> None:
    """Append UTF-8 text to an existing file."""
    try:
        with path.open("a", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as err:
        raise FileSystemError("append to", path, err) from err


def copy_file(src: Path, dest: Path) -> None:
    """Copy a single file, creating parent directories."""
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dest)
    except OSError as err:
        raise FileSystemError("copy", src, err) from err


def reset_dir(path: Path) -> None:
    """Delete `path` if present and recreate it empty.

    Leftovers from an interrupted build are removed here, so a versioned
    output directory is never partially overwritten.
    """
    if path.exists():
        logger.debug("removing_output_dir", path=str(path))
        try:
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()
        except OSError as err:
            raise FileSystemError("delete", path, err) from err

    try:
        path.mkdir(parents=True)
    except OSError as err:
        raise FileSystemError("create", path, err) from err
