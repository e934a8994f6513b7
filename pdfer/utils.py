"""Utility helpers shared by the merge and split engines."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterable, Iterator, Union

PathLike = Union[str, Path]

LOGGER = logging.getLogger("pdfer.io")


def ensure_path(path: PathLike) -> Path:
    """Return a :class:`~pathlib.Path` instance for *path*."""

    return Path(path).expanduser()


def ensure_iterable(paths: Iterable[PathLike]) -> list[Path]:
    """Convert an iterable of paths to :class:`Path` objects."""

    return [ensure_path(path) for path in paths]


def _target_mode(path: Path) -> int:
    """Permission bits for a file about to replace *path*."""

    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


@contextmanager
def atomic_write(destination: PathLike) -> Iterator[IO[bytes]]:
    """Yield a binary handle whose content replaces *destination* on success.

    Bytes go to a temporary file in the destination directory, which is
    flushed, synced and moved over *destination* with :func:`os.replace` only
    once the ``with`` block finishes without error. On any failure the
    temporary file is removed and *destination* is left as it was.
    """

    path = ensure_path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    handle = tempfile.NamedTemporaryFile(
        "wb", delete=False, dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    temp_path = Path(handle.name)
    try:
        with handle:
            yield handle
            handle.flush()
            os.fsync(handle.fileno())
        os.chmod(temp_path, _target_mode(path))
        os.replace(temp_path, path)
    except BaseException:
        LOGGER.debug("Discarding temporary file %s", temp_path)
        temp_path.unlink(missing_ok=True)
        raise
    LOGGER.debug("Wrote %s", path)


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"


__all__ = [
    "PathLike",
    "ensure_path",
    "ensure_iterable",
    "atomic_write",
    "format_file_size",
]
