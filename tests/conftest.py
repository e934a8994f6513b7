from __future__ import annotations

from pathlib import Path
import sys
from typing import Callable, Sequence

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

PdfFactory = Callable[..., Path]


def write_pdf(
    path: Path,
    widths: Sequence[int],
    title: str | None = None,
    author: str | None = None,
) -> Path:
    """Write a PDF with one blank page per entry in *widths*."""
    writer = PdfWriter()
    for width in widths:
        writer.add_blank_page(width=width, height=200)
    metadata = {}
    if title is not None:
        metadata["/Title"] = title
    if author is not None:
        metadata["/Author"] = author
    if metadata:
        writer.add_metadata(metadata)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("wb") as stream:
        writer.write(stream)
    return path


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> PdfFactory:
    def _create(
        filename: str,
        pages: int = 1,
        *,
        title: str | None = None,
        author: str | None = None,
        first_width: int = 100,
    ) -> Path:
        widths = [first_width + index for index in range(pages)]
        return write_pdf(tmp_path / filename, widths, title=title, author=author)

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: PdfFactory) -> Path:
    return pdf_factory("document.pdf", pages=10, title="Sample", author="Tester")


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def not_a_pdf(tmp_path: Path) -> Path:
    path = tmp_path / "notes.pdf"
    path.write_text("this is plain text, not a PDF")
    return path
