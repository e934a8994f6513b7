"""
Type definitions and dataclasses for pdfer.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

PageSelection = List[int]


@dataclass(frozen=True)
class PageToken:
    """
    One comma-separated unit of a page-range spec, before validation.

    Attributes:
        text: The token exactly as it appeared (whitespace trimmed)
        start: First page of the token
        end: Last page for closed ranges, ``None`` for single pages and
            open-ended ranges
        open_ended: Whether the token is of the form ``N-``
    """
    text: str
    start: int
    end: Optional[int] = None
    open_ended: bool = False

    @property
    def is_single(self) -> bool:
        return self.end is None and not self.open_ended


class ConflictChoice(str, enum.Enum):
    """Resolution applied to an output target."""

    PROCEED = "proceed"
    OVERWRITE = "overwrite"
    RENAME = "rename"
    ABORT = "abort"


@dataclass
class OutputTarget:
    """
    One planned output document.

    Attributes:
        path: Destination path (updated when the target is renamed)
        pages: 1-based page numbers written to this target, in order
        label: Human readable page label used in metadata
        policy: Conflict resolution applied to the target
        requested_path: Path originally planned, before any rename
    """
    path: Path
    pages: PageSelection
    label: str = ""
    policy: ConflictChoice = ConflictChoice.PROCEED
    requested_path: Optional[Path] = None

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        if self.requested_path is None:
            self.requested_path = self.path


@dataclass
class OperationPlan:
    """Every output target of one invocation, built before any write."""

    operation: str
    sources: List[Path]
    targets: List[OutputTarget] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return sum(len(target.pages) for target in self.targets)


@dataclass
class OperationResult:
    """
    Result of executing an :class:`OperationPlan`.

    Attributes:
        operation: ``"merge"`` or ``"split"``
        files_created: Paths written successfully, in plan order
        failures: ``(path, error message)`` for targets that failed to write
        aborted: Whether the user aborted part-way
    """
    operation: str
    files_created: List[str] = field(default_factory=list)
    failures: List[Tuple[str, str]] = field(default_factory=list)
    aborted: bool = False

    @property
    def success(self) -> bool:
        return not self.failures and not self.aborted

    def __str__(self) -> str:
        """String representation of the result."""
        return (
            "OperationResult(operation={operation}, created={created}, "
            "failed={failed}, aborted={aborted})"
        ).format(
            operation=self.operation,
            created=len(self.files_created),
            failed=len(self.failures),
            aborted=self.aborted,
        )


@dataclass
class PDFInfo:
    """
    PDF document information and metadata.

    Attributes:
        path: Location of the document
        num_pages: Number of pages in the PDF
        version: PDF header version, e.g. ``"1.7"``
        file_size: File size in bytes
        title: PDF title metadata
        author: PDF author metadata
        subject: PDF subject metadata
    """
    path: Path
    num_pages: int
    version: str
    file_size: int = 0
    title: Optional[str] = None
    author: Optional[str] = None
    subject: Optional[str] = None
