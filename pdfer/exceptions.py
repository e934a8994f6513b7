"""
Custom exceptions for pdfer.

Every error raised by the library derives from :class:`PdferError` and
carries the process exit code the CLI should use when it surfaces it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

EXIT_OK = 0
EXIT_VALIDATION = 1
EXIT_IO = 3
EXIT_ABORTED = 4


class PdferError(Exception):
    """Base exception for all pdfer errors."""

    exit_code = EXIT_VALIDATION

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown pdfer error occurred."


class InvalidPageSpec(PdferError):
    """Raised when a page-range token does not match the grammar."""

    def __init__(self, token: str, reason: str = "") -> None:
        self.token = token
        message = f"Invalid page specification: '{token}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PageOutOfRange(PdferError):
    """Raised when a resolved page index falls outside the document."""

    def __init__(self, page: int, page_count: int) -> None:
        self.page = page
        self.page_count = page_count
        super().__init__(
            f"Page {page} is out of range (document has {page_count} pages, valid pages are 1-{page_count})"
        )


class EmptyPageSelection(PdferError):
    """Raised when a page selection resolves to zero pages."""

    @property
    def default_message(self) -> str:
        return "No pages selected (check your page range)."


class InvalidPdfFile(PdferError):
    """Raised when an input cannot be read as a PDF document."""

    def __init__(self, path: Union[str, Path], reason: str = "") -> None:
        self.path = Path(path)
        message = f"Invalid PDF file: {path}"
        if reason:
            message = f"{message}. Error: {reason}"
        super().__init__(message)


class EmptyPdfInput(PdferError):
    """Raised when a PDF with zero pages is used as merge or split input."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        super().__init__(f"Input PDF has no pages: {path}")


class OutputConflict(PdferError):
    """Signals that a planned output path already exists.

    Conflicts are handed to the conflict resolver; this error only escapes
    when a conflict cannot be resolved (for example a rename target that is
    itself taken).
    """

    def __init__(self, path: Union[str, Path], message: Optional[str] = None) -> None:
        self.path = Path(path)
        super().__init__(message or f"Output already exists: {path}")


class WriteFailure(PdferError):
    """Raised when writing an output document fails."""

    exit_code = EXIT_IO

    def __init__(self, path: Union[str, Path], reason: str = "") -> None:
        self.path = Path(path)
        message = f"Failed to write {path}"
        if reason:
            message = f"{message}. Error: {reason}"
        super().__init__(message)


class AbortedByUser(PdferError):
    """Raised when the user chooses to abort at a conflict prompt."""

    exit_code = EXIT_ABORTED

    @property
    def default_message(self) -> str:
        return "Aborted."
