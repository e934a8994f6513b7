"""Document discovery and information helpers used by the info command."""

from __future__ import annotations

import glob
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Set

from .backends.base import PDFBackend
from .document import SourceDocument
from .exceptions import InvalidPdfFile, PdferError
from .types import PDFInfo
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("pdfer.info")

_GLOB_CHARS = set("*?[")


def is_pdf_path(path: Path) -> bool:
    return path.suffix.lower() == ".pdf"


def _expand(raw: PathLike) -> List[Path]:
    path = ensure_path(raw)
    if path.exists() or not _GLOB_CHARS.intersection(str(raw)):
        return [path]
    matches = sorted(glob.glob(str(path)))
    if not matches:
        raise PdferError(f"No files match pattern: {raw}")
    return [Path(match) for match in matches]


def collect_pdf_files(paths: Iterable[PathLike], recursive: bool = False) -> List[Path]:
    """Resolve files, directories and glob patterns into a sorted PDF list.

    Raises:
        InvalidPdfFile: A file argument does not have a ``.pdf`` extension.
        PdferError: A path is missing, a directory was given without
            *recursive*, or nothing was found.
    """

    pdf_files: List[Path] = []
    visited: Set[Path] = set()

    for raw in paths:
        for path in _expand(raw):
            if path.is_dir():
                if not recursive:
                    raise PdferError(
                        f"'{path}' is a directory. Use -r/--recursive to search subdirectories"
                    )
                resolved = path.resolve()
                if resolved in visited:
                    continue
                visited.add(resolved)
                found = sorted(
                    candidate
                    for candidate in path.rglob("*")
                    if candidate.is_file() and is_pdf_path(candidate)
                )
                LOGGER.debug("Found %d PDF(s) under %s", len(found), path)
                pdf_files.extend(found)
            elif path.is_file():
                if not is_pdf_path(path):
                    raise InvalidPdfFile(path, "not a .pdf file")
                pdf_files.append(path)
            else:
                raise PdferError(f"Invalid path: {path}")

    unique = sorted(set(pdf_files))
    if not unique:
        raise PdferError("No PDF files found")
    return unique


def get_pdf_info(path: PathLike, *, backend: Optional[PDFBackend] = None) -> PDFInfo:
    """Return :class:`PDFInfo` describing the PDF located at *path*."""

    return SourceDocument(path, backend=backend).to_pdf_info()


__all__ = ["collect_pdf_files", "get_pdf_info", "is_pdf_path"]
