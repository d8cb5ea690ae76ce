"""
PDF Labeler - Stamp header bands and footer captions onto PDF pages.

Every page grows by a shaded header band carrying a left label (with
``%Page``/``%EndPage`` replaced by the page number and page count) and a
right-aligned label. A small footer caption is centered near the bottom of
the page and can open an external URI when clicked.

Quick Start:
    >>> from pdf_labeler import label_pdf, resolve_config
    >>> config = resolve_config('in.pdf', 'out.pdf', left_template='Page %Page of %EndPage')
    >>> result = label_pdf(config)

Main Classes:
    - PDFLabeler: Runs the load / decorate / write pipeline for one PDF
    - PageDecorator: Applies the decoration to individual pages

Data Classes:
    - DecorationConfig: Paths and texts of one run
    - LayoutConstants: Font sizes, margins and colors
    - LayoutMetrics: Measurements derived from the embedded font
    - LabelResult: Result of a labeling run
    - PDFInfo: PDF information

For CLI usage, use the 'pdf-labeler' command after installation.
"""

__version__ = "1.0.0"
__author__ = "PDF Labeler CLI Contributors"
__license__ = "MIT"

# Core classes
from pdf_labeler.labeler import PDFLabeler, label_pdf
from pdf_labeler.decorator import (
    PageDecorator,
    compute_layout_metrics,
    decorate_document,
    substitute_tokens,
)
from pdf_labeler.config import resolve_config

# Data types
from pdf_labeler.types import (
    DecorationConfig,
    LabelResult,
    LayoutConstants,
    LayoutMetrics,
    LinkAnnotation,
    PageDecoration,
    PDFInfo,
)

# Exceptions
from pdf_labeler.exceptions import (
    PDFLabelerException,
    ConfigurationError,
    DocumentLoadError,
    EncryptedPDFError,
    FontEmbeddingError,
    DecorationError,
    SerializationError,
)

# Utility functions
from pdf_labeler.info import get_pdf_info
from pdf_labeler.utils import default_font_path, format_file_size

__all__ = [
    # Main classes
    "PDFLabeler",
    "PageDecorator",
    "label_pdf",
    "decorate_document",
    "compute_layout_metrics",
    "substitute_tokens",
    "resolve_config",
    # Data types
    "DecorationConfig",
    "LabelResult",
    "LayoutConstants",
    "LayoutMetrics",
    "LinkAnnotation",
    "PageDecoration",
    "PDFInfo",
    # Exceptions
    "PDFLabelerException",
    "ConfigurationError",
    "DocumentLoadError",
    "EncryptedPDFError",
    "FontEmbeddingError",
    "DecorationError",
    "SerializationError",
    # Utility functions
    "get_pdf_info",
    "default_font_path",
    "format_file_size",
    # Version info
    "__version__",
]
