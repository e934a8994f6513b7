from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest
from pypdf import PdfReader, PdfWriter

from pdfer.backends import PypdfBackend
from pdfer.exceptions import EmptyPdfInput, InvalidPdfFile, WriteFailure
from pdfer.document import SourceDocument
from pdfer.utils import atomic_write, format_file_size


def _leftovers(directory: Path) -> list[str]:
    return [path.name for path in directory.iterdir() if path.suffix == ".tmp"]


def test_atomic_write_creates_file(tmp_path: Path) -> None:
    destination = tmp_path / "nested" / "out.bin"

    with atomic_write(destination) as handle:
        handle.write(b"complete")

    assert destination.read_bytes() == b"complete"
    assert _leftovers(destination.parent) == []


def test_atomic_write_failure_keeps_previous_content(tmp_path: Path) -> None:
    destination = tmp_path / "out.bin"
    destination.write_bytes(b"previous")

    with pytest.raises(RuntimeError):
        with atomic_write(destination) as handle:
            handle.write(b"half")
            raise RuntimeError("disk went away")

    assert destination.read_bytes() == b"previous"
    assert _leftovers(tmp_path) == []


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_atomic_write_keeps_existing_permissions(tmp_path: Path) -> None:
    destination = tmp_path / "shared.pdf"
    destination.write_bytes(b"previous")
    destination.chmod(0o644)

    with atomic_write(destination) as handle:
        handle.write(b"replacement")

    assert stat.S_IMODE(destination.stat().st_mode) == 0o644
    assert destination.read_bytes() == b"replacement"


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_atomic_write_new_file_follows_umask(tmp_path: Path) -> None:
    destination = tmp_path / "fresh.bin"
    previous = os.umask(0o027)
    try:
        with atomic_write(destination) as handle:
            handle.write(b"data")
    finally:
        os.umask(previous)

    assert stat.S_IMODE(destination.stat().st_mode) == 0o640


def test_interrupted_pdf_write_never_truncates_target(
    monkeypatch: pytest.MonkeyPatch, sample_pdf: Path, tmp_path: Path
) -> None:
    destination = tmp_path / "existing.pdf"
    destination.write_bytes(b"prior content")

    def _partial_write(self, stream):
        stream.write(b"%PDF-1.3\n% truncated")
        raise OSError("No space left on device")

    monkeypatch.setattr(PdfWriter, "write", _partial_write)
    document = SourceDocument(sample_pdf)
    writer = document.extract_pages([1, 2])

    with pytest.raises(WriteFailure) as excinfo:
        document.write(writer, destination)

    assert excinfo.value.path == destination
    assert destination.read_bytes() == b"prior content"
    assert _leftovers(tmp_path) == []


def test_failed_write_to_new_path_leaves_nothing(
    monkeypatch: pytest.MonkeyPatch, sample_pdf: Path, tmp_path: Path
) -> None:
    destination = tmp_path / "fresh.pdf"

    def _fail_replace(src, dst):
        raise OSError("rename failed")

    monkeypatch.setattr("pdfer.utils.os.replace", _fail_replace)
    document = SourceDocument(sample_pdf)

    with pytest.raises(WriteFailure):
        document.write(document.extract_pages([1]), destination)

    assert not destination.exists()
    assert _leftovers(tmp_path) == []


def test_source_document_properties(sample_pdf: Path) -> None:
    document = SourceDocument(sample_pdf, backend=PypdfBackend())

    assert document.page_count == 10
    assert document.version.count(".") == 1
    assert document.metadata == {"title": "Sample", "author": "Tester"}


def test_source_document_without_metadata(pdf_factory) -> None:
    document = SourceDocument(pdf_factory("plain.pdf", pages=2))

    assert document.metadata is None


def test_extract_pages_keeps_requested_order(sample_pdf: Path, tmp_path: Path) -> None:
    document = SourceDocument(sample_pdf)
    destination = tmp_path / "picked.pdf"

    document.write(document.extract_pages([3, 1]), destination)

    reader = PdfReader(str(destination))
    widths = [float(page.mediabox.width) for page in reader.pages]
    assert widths == [102.0, 100.0]


def test_require_pages_on_empty_document(empty_pdf: Path) -> None:
    document = SourceDocument(empty_pdf)

    assert document.page_count == 0
    with pytest.raises(EmptyPdfInput):
        document.require_pages()


def test_load_rejects_non_pdf(not_a_pdf: Path) -> None:
    with pytest.raises(InvalidPdfFile):
        SourceDocument(not_a_pdf)


def test_load_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidPdfFile):
        SourceDocument(tmp_path / "missing.pdf")


def test_format_file_size() -> None:
    assert format_file_size(500) == "500.0 B"
    assert format_file_size(1024) == "1.0 KB"
    assert format_file_size(1536) == "1.5 KB"
    assert format_file_size(1024 * 1024) == "1.0 MB"
