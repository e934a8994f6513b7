from __future__ import annotations

from pathlib import Path

import pytest
from pypdf import PdfReader

from pdfer.conflicts import ConflictResolver, FixedDecisionProvider, ScriptedDecisionProvider
from pdfer.exceptions import AbortedByUser, EmptyPdfInput, InvalidPdfFile, PdferError
from pdfer.merger import PDFMerger, merge_pdfs
from pdfer.types import ConflictChoice


def _widths(path: Path) -> list[float]:
    return [float(page.mediabox.width) for page in PdfReader(str(path)).pages]


def test_merge_preserves_input_and_page_order(pdf_factory, tmp_path: Path) -> None:
    doc_a = pdf_factory("a.pdf", pages=2, first_width=100)
    doc_b = pdf_factory("b.pdf", pages=3, first_width=200)
    output = tmp_path / "merged.pdf"

    result = merge_pdfs([doc_a, doc_b], output)

    assert result.success
    assert result.files_created == [str(output)]
    assert _widths(output) == [100.0, 101.0, 200.0, 201.0, 202.0]


def test_merge_reversed_order(pdf_factory, tmp_path: Path) -> None:
    doc_a = pdf_factory("a.pdf", pages=2, first_width=100)
    doc_b = pdf_factory("b.pdf", pages=1, first_width=300)
    output = tmp_path / "merged.pdf"

    merge_pdfs([doc_b, doc_a], output)

    assert _widths(output) == [300.0, 100.0, 101.0]


def test_merge_rejects_empty_input(pdf_factory, empty_pdf: Path, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"

    with pytest.raises(EmptyPdfInput) as excinfo:
        merge_pdfs([pdf_factory("a.pdf", pages=2), empty_pdf], output)

    assert excinfo.value.path == empty_pdf
    assert not output.exists()


def test_merge_rejects_invalid_input(pdf_factory, not_a_pdf: Path, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"

    with pytest.raises(InvalidPdfFile):
        merge_pdfs([pdf_factory("a.pdf"), not_a_pdf], output)

    assert not output.exists()


def test_merge_rejects_missing_input(pdf_factory, tmp_path: Path) -> None:
    with pytest.raises(InvalidPdfFile):
        merge_pdfs([pdf_factory("a.pdf"), tmp_path / "missing.pdf"], tmp_path / "out.pdf")


def test_merge_no_inputs(tmp_path: Path) -> None:
    with pytest.raises(PdferError):
        merge_pdfs([], tmp_path / "out.pdf")


def test_merge_adds_pdf_suffix(pdf_factory, tmp_path: Path) -> None:
    result = merge_pdfs([pdf_factory("a.pdf"), pdf_factory("b.pdf")], tmp_path / "combined")

    assert result.files_created == [str(tmp_path / "combined.pdf")]
    assert (tmp_path / "combined.pdf").exists()


def test_merge_copies_first_available_metadata(pdf_factory, tmp_path: Path) -> None:
    plain = pdf_factory("plain.pdf")
    titled = pdf_factory("titled.pdf", title="Document Two", author="Someone")
    output = tmp_path / "merged.pdf"

    merge_pdfs([plain, titled], output)

    metadata = PdfReader(str(output)).metadata
    assert metadata.title == "Document Two"
    assert metadata.author == "Someone"


def test_merge_without_metadata(pdf_factory, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"

    merge_pdfs([pdf_factory("a.pdf", title="Keep out")], output, metadata=False)

    metadata = PdfReader(str(output)).metadata
    assert metadata is None or metadata.title is None


def test_merge_rename_leaves_existing_output(pdf_factory, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"
    output.write_bytes(b"existing")
    resolver = ConflictResolver(ScriptedDecisionProvider([ConflictChoice.RENAME]))

    result = merge_pdfs([pdf_factory("a.pdf"), pdf_factory("b.pdf")], output, resolver=resolver)

    renamed = tmp_path / "merged_1.pdf"
    assert result.files_created == [str(renamed)]
    assert output.read_bytes() == b"existing"
    assert len(PdfReader(str(renamed)).pages) == 2


def test_merge_overwrite_replaces_output(pdf_factory, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"
    output.write_bytes(b"existing")
    resolver = ConflictResolver(FixedDecisionProvider(ConflictChoice.OVERWRITE))

    merge_pdfs([pdf_factory("a.pdf", pages=3)], output, resolver=resolver)

    assert len(PdfReader(str(output)).pages) == 3


def test_merge_abort_keeps_existing_output(pdf_factory, tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"
    output.write_bytes(b"existing")
    resolver = ConflictResolver(FixedDecisionProvider(ConflictChoice.ABORT))

    with pytest.raises(AbortedByUser):
        merge_pdfs([pdf_factory("a.pdf")], output, resolver=resolver)

    assert output.read_bytes() == b"existing"


def test_merger_plan_covers_all_pages(pdf_factory, tmp_path: Path) -> None:
    merger = PDFMerger([pdf_factory("a.pdf", pages=2), pdf_factory("b.pdf", pages=3)])

    plan = merger.plan(tmp_path / "out.pdf")

    assert plan.operation == "merge"
    assert len(plan.targets) == 1
    assert plan.targets[0].pages == [1, 2, 3, 4, 5]
    assert merger.total_pages == 5
