"""Merge functionality for :mod:`pdfer`."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .backends.base import PDFBackend
from .conflicts import ConflictResolver
from .document import SourceDocument
from .exceptions import PdferError
from .types import OperationPlan, OperationResult, OutputTarget
from .utils import PathLike, ensure_iterable, ensure_path

LOGGER = logging.getLogger("pdfer.merge")


class PDFMerger:
    """Combine several PDF documents into one, in the order given."""

    def __init__(
        self,
        inputs: Iterable[PathLike],
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.input_paths = ensure_iterable(inputs)
        if not self.input_paths:
            raise PdferError("No input PDFs provided")
        if len(self.input_paths) == 1:
            LOGGER.warning(
                "Only one input file provided; the output will be a copy of %s",
                self.input_paths[0],
            )

        # Every input is loaded and checked before any output is planned.
        self.documents: List[SourceDocument] = []
        for pdf_path in self.input_paths:
            LOGGER.debug("Loading input PDF %s", pdf_path)
            document = SourceDocument(pdf_path, backend=backend)
            document.require_pages()
            self.documents.append(document)

    @property
    def total_pages(self) -> int:
        return sum(document.page_count for document in self.documents)

    def plan(self, output: PathLike) -> OperationPlan:
        output_path = ensure_path(output)
        if output_path.suffix.lower() != ".pdf":
            output_path = output_path.with_name(output_path.name + ".pdf")

        target = OutputTarget(
            path=output_path,
            pages=list(range(1, self.total_pages + 1)),
            label=f"Merged from {len(self.documents)} file(s)",
        )
        return OperationPlan(operation="merge", sources=list(self.input_paths), targets=[target])

    def _build_writer(self, metadata: bool):
        first = self.documents[0]
        writer = first.new_writer()
        copied_metadata = not metadata
        for document in self.documents:
            pages = list(range(1, document.page_count + 1))
            LOGGER.debug("Adding %d page(s) from %s", len(pages), document.path)
            document.extract_pages(pages, writer)
            if not copied_metadata and document.metadata:
                document.copy_metadata(writer)
                copied_metadata = True
        return writer

    def merge(
        self,
        output: PathLike,
        *,
        resolver: Optional[ConflictResolver] = None,
        metadata: bool = True,
    ) -> OperationResult:
        """Write the merged document to *output*.

        Args:
            output: Destination path; ``.pdf`` is appended when missing.
            resolver: Conflict resolver consulted if *output* exists.
            metadata: Copy title/author/subject from the first input that
                declares any.

        Raises:
            AbortedByUser: The existing output was not to be replaced.
            WriteFailure: The merged document could not be written.
        """

        resolver = resolver or ConflictResolver()
        plan = self.plan(output)
        target = resolver.resolve(plan.targets[0])

        writer = self._build_writer(metadata)
        self.documents[0].write(writer, target.path)

        LOGGER.info(
            "Merged %d PDFs (%d pages) into %s",
            len(self.documents),
            self.total_pages,
            target.path,
        )
        return OperationResult(operation="merge", files_created=[str(target.path)])


def merge_pdfs(
    inputs: Iterable[PathLike],
    output: PathLike,
    *,
    resolver: Optional[ConflictResolver] = None,
    backend: Optional[PDFBackend] = None,
    metadata: bool = True,
) -> OperationResult:
    """Merge *inputs* into *output* and return the operation result.

    Raises:
        InvalidPdfFile: An input is missing, unreadable or not a PDF.
        EmptyPdfInput: An input has no pages.
    """

    merger = PDFMerger(inputs, backend=backend)
    return merger.merge(output, resolver=resolver, metadata=metadata)


__all__ = ["PDFMerger", "merge_pdfs"]
