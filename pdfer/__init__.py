"""
pdfer - merge and split PDF files safely.

Quick Start:
    >>> from pdfer import merge_pdfs, split_pdf
    >>> merge_pdfs(['a.pdf', 'b.pdf'], 'merged.pdf')
    >>> split_pdf('report.pdf', '1,3,5-10', 'report_pages')

Page ranges:
    - parse_page_spec: Parse "1,3,5-10,12-" into page tokens
    - resolve_selection: Bind tokens to a page count
    - validate: Parse and resolve in one step

Main Classes:
    - PDFMerger: Merge several PDFs, in order, into one
    - PDFSplitter: Split one PDF into per-page or per-range files
    - ConflictResolver: Decide what happens to outputs that already exist

Exceptions:
    - PdferError: Base exception
    - InvalidPageSpec, PageOutOfRange, EmptyPageSelection
    - InvalidPdfFile, EmptyPdfInput
    - OutputConflict, WriteFailure, AbortedByUser

For CLI usage, use the 'pdfer' command after installation.
"""

__version__ = "1.0.0"

# Page ranges
from pdfer.ranges import parse_page_spec, resolve_groups, resolve_selection, validate

# Core classes
from pdfer.conflicts import (
    ConflictResolver,
    FixedDecisionProvider,
    PromptDecisionProvider,
    ScriptedDecisionProvider,
)
from pdfer.document import SourceDocument
from pdfer.merger import PDFMerger, merge_pdfs
from pdfer.splitter import PDFSplitter, split_pdf

# Data types
from pdfer.types import (
    ConflictChoice,
    OperationPlan,
    OperationResult,
    OutputTarget,
    PageToken,
    PDFInfo,
)

# Exceptions
from pdfer.exceptions import (
    PdferError,
    InvalidPageSpec,
    PageOutOfRange,
    EmptyPageSelection,
    InvalidPdfFile,
    EmptyPdfInput,
    OutputConflict,
    WriteFailure,
    AbortedByUser,
)

# Utility functions
from pdfer.info import collect_pdf_files, get_pdf_info

__author__ = "pdfer Contributors"
__license__ = "MIT"

__all__ = [
    # Page ranges
    "parse_page_spec",
    "resolve_groups",
    "resolve_selection",
    "validate",
    # Main classes
    "ConflictResolver",
    "FixedDecisionProvider",
    "PromptDecisionProvider",
    "ScriptedDecisionProvider",
    "SourceDocument",
    "PDFMerger",
    "PDFSplitter",
    "merge_pdfs",
    "split_pdf",
    # Data types
    "ConflictChoice",
    "OperationPlan",
    "OperationResult",
    "OutputTarget",
    "PageToken",
    "PDFInfo",
    # Exceptions
    "PdferError",
    "InvalidPageSpec",
    "PageOutOfRange",
    "EmptyPageSelection",
    "InvalidPdfFile",
    "EmptyPdfInput",
    "OutputConflict",
    "WriteFailure",
    "AbortedByUser",
    # Utility functions
    "collect_pdf_files",
    "get_pdf_info",
    # Version info
    "__version__",
]
