"""Filesystem helpers for marktools."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import TextIO

from .config import UNLIMITED
from .constants import DEFAULT_MAX_LINE_LENGTH
from .exceptions import SourceError

MAX_LINE_LENGTH_ENV_VAR = "MARKTOOLS_MAX_LINE_LENGTH"
BOOKMARK_DIR_ENV_VAR = "MARKTOOLS_BOOKMARK_DIR"
DEFAULT_BOOKMARK_DIR = "~/.bookmarks"


def get_max_line_length(default: int = DEFAULT_MAX_LINE_LENGTH) -> int:
    """Resolve the maximum allowed line length.

    Args:
        default: Fallback value in characters when the environment variable is
            unset.

    Returns:
        int: Maximum allowed line length in characters, or ``-1`` for no limit.

    Raises:
        ValueError: If the environment value is neither a positive integer nor
            ``-1``.

    Examples:
        os.environ["MARKTOOLS_MAX_LINE_LENGTH"] = "160"
        limit = get_max_line_length(default=120)
    """
    env_value = os.environ.get(MAX_LINE_LENGTH_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_length = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_LINE_LENGTH_ENV_VAR}: {env_value} "
            "(expected positive integer or -1)"
        )
        raise ValueError(error_message) from error

    if max_length <= 0 and max_length != UNLIMITED:
        error_message = (
            f"{MAX_LINE_LENGTH_ENV_VAR} must be a positive integer or -1, got {max_length}."
        )
        raise ValueError(error_message)

    return max_length


def get_bookmark_dir(override: str | None = None) -> Path:
    """Resolve the directory holding bookmark symlinks.

    Args:
        override: Explicit location, taking precedence over the environment.

    Returns:
        Path: Bookmark store location with ``~`` expanded. The directory may
            not exist yet.
    """
    raw = override or os.environ.get(BOOKMARK_DIR_ENV_VAR) or DEFAULT_BOOKMARK_DIR
    return Path(raw).expanduser()


def safe_read(filepath: Path) -> TextIO:
    """Open a file for reading with consistent error handling.

    Args:
        filepath: Path to the file.

    Returns:
        TextIO: File handle opened for reading in UTF-8.

    Raises:
        SourceError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("notes.txt")) as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding="UTF-8")
    except OSError as error:
        error_message = f"Error accessing {filepath}: {error.strerror or error}"
        raise SourceError(error_message) from error


def iter_source_files(
    root: Path, on_error: Callable[[OSError], None] | None = None
) -> Iterator[Path]:
    """Yield every file below a directory, depth first in sorted order.

    Symlinked directories are not followed and only regular files (or
    symlinks to them) are yielded.

    Args:
        root: Directory to walk.
        on_error: Called with the `OSError` raised for each directory that
            cannot be listed. Such directories are skipped.

    Yields:
        Path: Files found below `root`.
    """
    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = Path(dirpath) / filename
            if path.is_file():
                yield path
