"""
Custom exceptions for PDF Outline.

This module defines all custom exceptions used throughout the library.
"""


class PDFOutlineException(Exception):
    """Base exception for all PDF Outline errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF outline error occurred."


class InvalidPDFError(PDFOutlineException):
    """Raised when PDF data is invalid or corrupted."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(PDFOutlineException):
    """Raised when PDF is encrypted and cannot be processed."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed."


class InvalidOutlineError(PDFOutlineException):
    """Raised when a flat outline violates its structural invariants."""

    @property
    def default_message(self) -> str:
        return "Invalid outline items."


class OutlineFileError(PDFOutlineException):
    """Raised when an outline file cannot be read, parsed or written."""

    @property
    def default_message(self) -> str:
        return "Unable to process outline file."
