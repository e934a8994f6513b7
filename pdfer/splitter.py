"""PDF splitting functionality built around :class:`SourceDocument`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .backends.base import PDFBackend
from .conflicts import ConflictResolver
from .document import SourceDocument
from .exceptions import AbortedByUser, OutputConflict, WriteFailure
from .ranges import describe_pages, parse_page_spec, resolve_groups
from .types import OperationPlan, OperationResult, OutputTarget, PageSelection
from .utils import PathLike, ensure_path

LOGGER = logging.getLogger("pdfer.split")


def default_output_dir(input_path: PathLike) -> Path:
    """Return ``<stem>_pages``, the directory used when none is given."""

    stem = Path(input_path).stem or "split"
    return Path(f"{stem}_pages")


def group_filename(pages: PageSelection, padding: int = 3) -> str:
    """Name an output group after its pages: ``page_007.pdf`` or ``pages_005-007.pdf``."""

    if len(pages) == 1:
        return f"page_{pages[0]:0{padding}d}.pdf"
    return f"pages_{pages[0]:0{padding}d}-{pages[-1]:0{padding}d}.pdf"


class PDFSplitter:
    """Extract page groups of one PDF into separate documents."""

    def __init__(
        self,
        input_path: PathLike,
        *,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.input_path = ensure_path(input_path)
        self._source = SourceDocument(self.input_path, backend=backend)
        self._source.require_pages()
        self.num_pages = self._source.page_count

    @property
    def source(self) -> SourceDocument:
        return self._source

    def plan(
        self,
        page_spec: Optional[str] = None,
        output_dir: Optional[PathLike] = None,
        padding: int = 3,
    ) -> OperationPlan:
        """Validate *page_spec* in full and lay out every output target.

        One target is planned per page-range token, or per page when no ranges are given.
        Repeated groups are planned once.
        """

        tokens = None if page_spec is None else parse_page_spec(page_spec)
        groups = resolve_groups(tokens, self.num_pages)

        directory = ensure_path(output_dir) if output_dir is not None else default_output_dir(self.input_path)
        plan = OperationPlan(operation="split", sources=[self.input_path])

        seen = set()
        for pages in groups:
            key = tuple(pages)
            if key in seen:
                LOGGER.warning("Skipping repeated page group %s", describe_pages(pages))
                continue
            seen.add(key)
            plan.targets.append(
                OutputTarget(
                    path=directory / group_filename(pages, padding),
                    pages=list(pages),
                    label=describe_pages(pages),
                )
            )

        LOGGER.debug(
            "Planned %d output(s) covering %d page(s)", len(plan.targets), plan.total_pages
        )
        return plan

    def _write_target(self, target: OutputTarget) -> None:
        writer = self._source.extract_pages(target.pages)
        self._source.copy_metadata(
            writer,
            title_suffix=f" - {target.label}",
            pages_label=target.label,
        )
        self._source.write(writer, target.path)

    def execute(
        self,
        plan: OperationPlan,
        *,
        resolver: Optional[ConflictResolver] = None,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> OperationResult:
        """Write every target of *plan* in order.

        A :class:`WriteFailure`, or an :class:`OutputConflict` that cannot be
        resolved, is recorded and the remaining targets are still attempted.
        :class:`AbortedByUser` stops the run; files written before the abort
        are kept and the result is marked ``aborted``.
        """

        resolver = resolver or ConflictResolver()
        result = OperationResult(operation="split")
        total = len(plan.targets)

        for index, target in enumerate(plan.targets, start=1):
            try:
                resolver.resolve(target)
            except AbortedByUser as exc:
                LOGGER.warning("%s %d of %d output(s) were written.", exc, len(result.files_created), total)
                result.aborted = True
                return result
            except OutputConflict as exc:
                LOGGER.error("%s", exc)
                result.failures.append((str(target.path), str(exc)))
                if progress_callback:
                    progress_callback(index, total)
                continue

            LOGGER.debug("Writing %s to %s", target.label, target.path)
            try:
                self._write_target(target)
            except WriteFailure as exc:
                result.failures.append((str(target.path), str(exc)))
            else:
                result.files_created.append(str(target.path))

            if progress_callback:
                progress_callback(index, total)

        LOGGER.info(
            "Split %s into %d file(s), %d failure(s)",
            self.input_path,
            len(result.files_created),
            len(result.failures),
        )
        return result

    def split(
        self,
        page_spec: Optional[str] = None,
        output_dir: Optional[PathLike] = None,
        *,
        resolver: Optional[ConflictResolver] = None,
        padding: int = 3,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> OperationResult:
        plan = self.plan(page_spec, output_dir, padding)
        return self.execute(plan, resolver=resolver, progress_callback=progress_callback)


def split_pdf(
    input_path: PathLike,
    page_spec: Optional[str] = None,
    output_dir: Optional[PathLike] = None,
    *,
    resolver: Optional[ConflictResolver] = None,
    backend: Optional[PDFBackend] = None,
    padding: int = 3,
) -> OperationResult:
    """Split *input_path* according to *page_spec* into *output_dir*."""

    splitter = PDFSplitter(input_path, backend=backend)
    return splitter.split(page_spec, output_dir, resolver=resolver, padding=padding)


__all__ = ["PDFSplitter", "split_pdf", "default_output_dir", "group_filename"]
