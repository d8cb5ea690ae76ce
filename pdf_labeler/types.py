"""
Type definitions and dataclasses for PDF Labeler.

This module defines data structures used throughout the library.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

Color = Tuple[float, float, float]
Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class DecorationConfig:
    """
    Everything a single labeling run needs to know.

    Attributes:
        input_path: Source PDF path
        output_path: Destination PDF path
        font_path: TrueType font used for every label
        left_template: Left header text, may contain ``%Page`` and ``%EndPage``
        right_text: Right header text
        footer_text: Footer caption
        footer_link_target: External URI attached to the footer caption
        password: Password for encrypted input documents
        keep_annotations: Append the footer link instead of replacing the
            page's annotations
    """
    input_path: str
    output_path: str
    font_path: str
    left_template: str = ""
    right_text: str = ""
    footer_text: str = ""
    footer_link_target: Optional[str] = None
    password: Optional[str] = None
    keep_annotations: bool = False


@dataclass(frozen=True)
class LayoutConstants:
    """
    Fixed sizes and colors shared by every page of a run.

    Attributes:
        header_font_size: Font size of the left/right header labels
        footer_font_size: Font size of the footer caption
        vertical_margin: Space above and below the header text inside the band
        horizontal_margin: Distance of the header labels from the page edges
        footer_offset: Footer baseline distance from the page bottom
        band_color: Fill color of the header band
        header_color: Header text color
        footer_color: Footer text color
    """
    header_font_size: float = 14
    footer_font_size: float = 5
    vertical_margin: float = 4
    horizontal_margin: float = 12
    footer_offset: float = 5
    band_color: Color = (236 / 256, 236 / 256, 239 / 256)
    header_color: Color = (0.0, 0.0, 0.0)
    footer_color: Color = (0.5, 0.5, 0.5)


@dataclass(frozen=True)
class LayoutMetrics:
    """
    Measurements derived once per run from the embedded font.

    ``header_band_height`` is the height every page grows by.
    """
    font_size: float
    vertical_margin: float
    horizontal_margin: float
    font_height: float
    header_band_height: float
    header_baseline_shift: float
    footer_font_size: float
    footer_text_height: float


@dataclass(frozen=True)
class LinkAnnotation:
    """A clickable page region that opens ``uri``.

    ``rect`` is ``(x1, y1, x2, y2)`` relative to the page's lower-left corner.
    """
    rect: Rect
    uri: str


@dataclass
class PageDecoration:
    """
    What was placed on one page.

    Attributes:
        index: Zero-based page index
        original_size: (width, height) before the header band was added
        new_size: (width, height) after the header band was added
        left_text: Left header after token substitution
        left_origin: Baseline start of the left header
        right_origin: Baseline start of the right header
        right_width: Measured width of the right header
        footer_box: Bounding box of the footer caption
        link: Link annotation attached to the footer, if any
    """
    index: int
    original_size: Tuple[float, float]
    new_size: Tuple[float, float]
    left_text: str
    left_origin: Tuple[float, float]
    right_origin: Tuple[float, float]
    right_width: float
    footer_box: Rect
    link: Optional[LinkAnnotation] = None

    @property
    def page_number(self) -> int:
        return self.index + 1


@dataclass
class LabelResult:
    """
    Result of a completed labeling run. Failed runs raise instead.

    Attributes:
        output_path: Path of the written PDF
        source_file: Path of the source PDF
        page_count: Number of decorated pages
        output_size: Size of the written PDF in bytes
        links_added: Number of link annotations created
        pages: Per-page decoration records
    """
    output_path: str
    source_file: str
    page_count: int = 0
    output_size: int = 0
    links_added: int = 0
    pages: List[PageDecoration] = field(default_factory=list)

    def __str__(self) -> str:
        """String representation of the result."""
        return f"LabelResult(pages={self.page_count}, output='{self.output_path}')"


@dataclass
class PDFInfo:
    """
    PDF document information.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: File size in bytes
        page_size: (width, height) of the first page
        annotations: Total number of annotations across all pages
        is_encrypted: Whether the PDF is encrypted
    """
    num_pages: int
    file_size: int
    page_size: Tuple[float, float] = (0.0, 0.0)
    annotations: int = 0
    is_encrypted: bool = False
