from __future__ import annotations

from pathlib import Path

import pytest

from pdfer.exceptions import InvalidPdfFile, PdferError
from pdfer.info import collect_pdf_files, get_pdf_info


def test_collect_single_file(sample_pdf: Path) -> None:
    assert collect_pdf_files([sample_pdf]) == [sample_pdf]


def test_collect_rejects_non_pdf_extension(tmp_path: Path) -> None:
    text_file = tmp_path / "notes.txt"
    text_file.write_text("hello")

    with pytest.raises(InvalidPdfFile):
        collect_pdf_files([text_file])


def test_collect_directory_requires_recursive(tmp_path: Path) -> None:
    with pytest.raises(PdferError, match="recursive"):
        collect_pdf_files([tmp_path])


def test_collect_recursive_is_sorted_and_unique(pdf_factory, tmp_path: Path) -> None:
    nested = pdf_factory("sub/deeper/b.pdf")
    top = pdf_factory("a.PDF")
    (tmp_path / "sub" / "readme.txt").write_text("skip me")

    found = collect_pdf_files([tmp_path, tmp_path / "sub", top], recursive=True)

    assert found == sorted([top, nested])


def test_collect_expands_glob(pdf_factory, tmp_path: Path) -> None:
    first = pdf_factory("one.pdf")
    second = pdf_factory("two.pdf")

    assert collect_pdf_files([str(tmp_path / "*.pdf")]) == [first, second]


def test_collect_missing_path(tmp_path: Path) -> None:
    with pytest.raises(PdferError, match="Invalid path"):
        collect_pdf_files([tmp_path / "missing.pdf"])


def test_collect_empty_directory(tmp_path: Path) -> None:
    (tmp_path / "empty").mkdir()

    with pytest.raises(PdferError, match="No PDF files found"):
        collect_pdf_files([tmp_path / "empty"], recursive=True)


def test_get_pdf_info(sample_pdf: Path) -> None:
    info = get_pdf_info(sample_pdf)

    assert info.path == sample_pdf
    assert info.num_pages == 10
    assert info.version.startswith("1.")
    assert info.file_size == sample_pdf.stat().st_size
    assert info.title == "Sample"
    assert info.author == "Tester"
    assert info.subject is None


def test_get_pdf_info_invalid(not_a_pdf: Path) -> None:
    with pytest.raises(InvalidPdfFile):
        get_pdf_info(not_a_pdf)
