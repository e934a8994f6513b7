"""pypdf backend implementation for pdfer."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PdfReadError

from ..exceptions import InvalidPdfFile, WriteFailure
from ..utils import atomic_write
from .base import BackendDocument, PDFBackend

LOGGER = logging.getLogger("pdfer.backend")

_METADATA_KEYS = {
    "/Title": "title",
    "/Author": "author",
    "/Subject": "subject",
    "/Creator": "creator",
    "/Keywords": "keywords",
}


@dataclass
class PypdfDocument(BackendDocument):
    reader: PdfReader

    def get_page(self, index: int) -> object:
        return self.reader.pages[index]

    def metadata(self) -> Dict[str, str]:
        info = self.reader.metadata
        if not info:
            return {}
        return {
            name: str(info[key])
            for key, name in _METADATA_KEYS.items()
            if info.get(key) not in (None, "")
        }

    def copy_metadata(self, writer: PdfWriter, *, title_suffix: str = "", pages_label: str | None = None) -> None:
        metadata = self.metadata()
        metadata_dict = {}

        if metadata.get("title"):
            metadata_dict['/Title'] = f"{metadata['title']}{title_suffix}"
        if metadata.get("author"):
            metadata_dict['/Author'] = metadata["author"]
        if metadata.get("subject"):
            metadata_dict['/Subject'] = metadata["subject"]
        if metadata.get("creator"):
            metadata_dict['/Creator'] = metadata["creator"]

        if pages_label:
            metadata_dict['/Keywords'] = pages_label

        metadata_dict.setdefault('/Producer', 'pdfer')
        writer.add_metadata(metadata_dict)


def _header_version(reader: PdfReader) -> str:
    header = getattr(reader, "pdf_header", "") or ""
    return header.replace("%PDF-", "", 1).strip() or "unknown"


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` under the hood."""

    def load(self, pdf_path: str) -> PypdfDocument:
        path = Path(pdf_path)
        if not path.exists() or not path.is_file():
            raise InvalidPdfFile(pdf_path, "file not found")

        try:
            raw_bytes = path.read_bytes()
        except OSError as exc:
            raise InvalidPdfFile(pdf_path, str(exc)) from exc

        if b"%PDF-" not in raw_bytes[:1024]:
            raise InvalidPdfFile(pdf_path, "missing %PDF header")

        try:
            reader = PdfReader(io.BytesIO(raw_bytes), strict=False)
            if reader.is_encrypted:
                raise InvalidPdfFile(pdf_path, "encrypted PDFs are not supported")
            num_pages = len(reader.pages)
        except InvalidPdfFile:
            raise
        except PdfReadError as exc:
            raise InvalidPdfFile(pdf_path, f"corrupted or invalid PDF: {exc}") from exc
        except Exception as exc:
            raise InvalidPdfFile(pdf_path, f"unexpected error reading PDF: {exc}") from exc

        LOGGER.debug("Loaded %s (%d pages)", path, num_pages)
        return PypdfDocument(
            num_pages=num_pages,
            file_size=len(raw_bytes),
            version=_header_version(reader),
            reader=reader,
        )

    def new_writer(self) -> PdfWriter:
        return PdfWriter()

    def add_pages(self, writer: PdfWriter, document: BackendDocument, indices: Iterable[int]) -> None:
        for index in indices:
            writer.add_page(document.get_page(index))

    def write(self, writer: PdfWriter, destination: str) -> None:
        try:
            with atomic_write(destination) as handle:
                writer.write(handle)
        except Exception as exc:
            LOGGER.error("Failed to write %s: %s", destination, exc)
            raise WriteFailure(destination, str(exc)) from exc
