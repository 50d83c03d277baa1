"""
PDF Outline - Read and write PDF bookmarks from flat, level-annotated lists.

This library converts between the flat outline an editor works with
(``{id, title, pageIndex, level}`` entries in display order) and the linked
``/Outlines`` object graph stored in a PDF.

Quick Start:
    >>> from pdf_outline import apply_outline, extract_outline
    >>> data = apply_outline(pdf_bytes, [
    ...     {"title": "Cover", "pageIndex": 0, "level": 0},
    ...     {"title": "Introduction", "pageIndex": 2, "level": 0},
    ...     {"title": "Goals", "pageIndex": 3, "level": 1},
    ... ])
    >>> [(item.title, item.level) for item in extract_outline(data)]
    [('Cover', 0), ('Introduction', 0), ('Goals', 1)]

Main Classes:
    - OutlineDocument: Open a PDF file, read or replace its outline, save it

Data Classes:
    - OutlineItem: Flat outline entry
    - OutlineNode: Node of an outline forest
    - OutlineOptions: Options for writing and reading outlines
    - OutlineInfo: Outline summary of a document

Exceptions:
    - PDFOutlineException: Base exception
    - InvalidPDFError: Invalid or corrupted PDF
    - EncryptedPDFError: Encrypted PDF
    - InvalidOutlineError: Outline violating its level or id invariants
    - OutlineFileError: Unreadable or malformed outline file

For CLI usage, use the 'pdf-outline' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF Outline CLI Contributors"
__license__ = "MIT"

# Core functions
from pdf_outline.outline import apply_outline, extract_outline, read_outline, write_outline
from pdf_outline.tree import build_tree, flatten, normalize_items
from pdf_outline.document import OutlineDocument

# Data types
from pdf_outline.types import OutlineInfo, OutlineItem, OutlineNode, OutlineOptions

# Exceptions
from pdf_outline.exceptions import (
    PDFOutlineException,
    InvalidPDFError,
    EncryptedPDFError,
    InvalidOutlineError,
    OutlineFileError,
)

# Id factories
from pdf_outline.ids import sequential_id_factory, uuid_id_factory

# Outline files
from pdf_outline.outline_file import read_outline_file, write_outline_file

__all__ = [
    # Core functions
    "apply_outline",
    "extract_outline",
    "read_outline",
    "write_outline",
    "build_tree",
    "flatten",
    "normalize_items",
    # Main classes
    "OutlineDocument",
    # Data types
    "OutlineInfo",
    "OutlineItem",
    "OutlineNode",
    "OutlineOptions",
    # Exceptions
    "PDFOutlineException",
    "InvalidPDFError",
    "EncryptedPDFError",
    "InvalidOutlineError",
    "OutlineFileError",
    # Id factories
    "sequential_id_factory",
    "uuid_id_factory",
    # Outline files
    "read_outline_file",
    "write_outline_file",
    # Version info
    "__version__",
]
