"""Adapter utilities for interacting with PDF files via pluggable backends."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .backends import BackendDocument, PypdfBackend
from .backends.base import PDFBackend
from .exceptions import EmptyPdfInput, PageOutOfRange
from .types import PDFInfo
from .utils import PathLike


class SourceDocument:
    """A loaded, read-only PDF document.

    Loading goes through a :class:`PDFBackend`; unreadable input raises
    :class:`~pdfer.exceptions.InvalidPdfFile`.
    """

    def __init__(
        self,
        pdf_path: PathLike,
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.path = Path(pdf_path)
        self.backend: PDFBackend = backend or PypdfBackend()
        self._document: BackendDocument = self.backend.load(str(pdf_path))

    # ------------------------------------------------------------------
    # Basic document information helpers
    # ------------------------------------------------------------------
    @property
    def document(self) -> BackendDocument:
        return self._document

    @property
    def page_count(self) -> int:
        return self._document.num_pages

    @property
    def version(self) -> str:
        return self._document.version

    @property
    def file_size(self) -> int:
        return self._document.file_size

    @property
    def metadata(self) -> Optional[Dict[str, str]]:
        """Title, author and subject when the document declares any."""
        metadata = self._document.metadata()
        subset = {
            key: metadata[key]
            for key in ("title", "author", "subject")
            if metadata.get(key)
        }
        return subset or None

    def require_pages(self) -> None:
        """Raise :class:`EmptyPdfInput` when the document has no pages."""
        if self.page_count == 0:
            raise EmptyPdfInput(self.path)

    # ------------------------------------------------------------------
    # Interaction helpers
    # ------------------------------------------------------------------
    def new_writer(self) -> Any:
        return self.backend.new_writer()

    def extract_pages(self, pages: Sequence[int], writer: Any = None) -> Any:
        """Append 1-based *pages* to *writer* (a new one by default) and return it."""
        for page in pages:
            if page < 1 or page > self.page_count:
                raise PageOutOfRange(page, self.page_count)
        if writer is None:
            writer = self.new_writer()
        self.backend.add_pages(writer, self._document, [page - 1 for page in pages])
        return writer

    def write(self, writer: Any, destination: PathLike) -> None:
        self.backend.write(writer, str(destination))

    def copy_metadata(
        self,
        writer: Any,
        *,
        title_suffix: str = "",
        pages_label: Optional[str] = None,
    ) -> None:
        """Copy core metadata and optional suffixes to ``writer``."""

        self._document.copy_metadata(writer, title_suffix=title_suffix, pages_label=pages_label)

    # ------------------------------------------------------------------
    # Reporting helpers
    # ------------------------------------------------------------------
    def to_pdf_info(self) -> PDFInfo:
        metadata = self.metadata or {}
        return PDFInfo(
            path=self.path,
            num_pages=self.page_count,
            version=self.version,
            file_size=self.file_size,
            title=metadata.get("title"),
            author=metadata.get("author"),
            subject=metadata.get("subject"),
        )


__all__ = ["SourceDocument"]
