"""Backend abstractions for PDF Labeler."""

from .base import (
    BackendDocument,
    BackendFont,
    BackendPage,
    DrawOperation,
    PDFBackend,
    RectangleOperation,
    TextOperation,
)
from .pypdf_backend import PypdfBackend, PypdfDocument

__all__ = [
    "BackendDocument",
    "BackendFont",
    "BackendPage",
    "DrawOperation",
    "PDFBackend",
    "PypdfBackend",
    "PypdfDocument",
    "RectangleOperation",
    "TextOperation",
]
