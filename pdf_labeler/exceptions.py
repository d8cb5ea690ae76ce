"""
Custom exceptions for PDF Labeler.

This module defines all custom exceptions used throughout the library.
"""


class PDFLabelerException(Exception):
    """Base exception for all PDF Labeler errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF labeler error occurred."


class ConfigurationError(PDFLabelerException):
    """Raised when the invocation does not describe a runnable job."""

    @property
    def default_message(self) -> str:
        return "Invalid labeling configuration."


class DocumentLoadError(PDFLabelerException):
    """Raised when the source document cannot be read or parsed."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class EncryptedPDFError(DocumentLoadError):
    """Raised when PDF is encrypted and cannot be processed."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class FontEmbeddingError(PDFLabelerException):
    """Raised when the label font cannot be loaded, embedded or measured."""

    @property
    def default_message(self) -> str:
        return "Unable to embed the label font."


class DecorationError(PDFLabelerException):
    """Raised when a page cannot be decorated."""

    @property
    def default_message(self) -> str:
        return "Failed to decorate PDF page."


class SerializationError(PDFLabelerException):
    """Raised when the labeled document cannot be serialized or written."""

    @property
    def default_message(self) -> str:
        return "Failed to write the labeled PDF."
