"""Backend protocol for PDF operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Sequence, Tuple, Union

from ..types import Color, LinkAnnotation


@dataclass(frozen=True)
class TextOperation:
    """A single line of text, ``(x, y)`` being the baseline start."""

    text: str
    x: float
    y: float
    font_name: str
    size: float
    color: Color


@dataclass(frozen=True)
class RectangleOperation:
    """A filled, unstroked rectangle anchored at its lower-left corner."""

    x: float
    y: float
    width: float
    height: float
    color: Color


DrawOperation = Union[TextOperation, RectangleOperation]


class BackendFont(Protocol):
    """An embedded font able to measure text."""

    name: str

    def height_at_size(self, size: float) -> float:
        """Return the full ascent-to-descent height at ``size``."""

    def width_of_text(self, text: str, size: float) -> float:
        """Return the advance width of ``text`` at ``size``."""


class BackendPage(Protocol):
    """A page of a loaded document.

    All coordinates are relative to the page's lower-left corner.
    """

    index: int
    operations: List[DrawOperation]

    def get_size(self) -> Tuple[float, float]:
        """Return ``(width, height)``."""

    def set_size(self, width: float, height: float) -> None:
        """Resize the page keeping its lower-left corner in place."""

    def draw_text(
        self,
        text: str,
        *,
        x: float,
        y: float,
        font: BackendFont,
        size: float,
        color: Color,
    ) -> None:
        """Draw one line of text."""

    def draw_rectangle(
        self,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
    ) -> None:
        """Draw a filled rectangle."""

    @property
    def annotation_count(self) -> int:
        """Number of annotations currently attached to the page."""

    def set_annotations(self, annotations: Sequence[LinkAnnotation]) -> None:
        """Replace the page's annotation collection."""

    def add_annotation(self, annotation: LinkAnnotation) -> None:
        """Append an annotation to the page."""


class BackendDocument(Protocol):
    """A document loaded fully into memory."""

    @property
    def page_count(self) -> int:
        """Number of pages."""

    def pages(self) -> Sequence[BackendPage]:
        """Pages in document order."""

    def embed_font(self, data: bytes) -> BackendFont:
        """Embed a TrueType font and return a handle for drawing and measuring."""

    def serialize(self) -> bytes:
        """Return the document, with every drawing applied, as PDF bytes."""


class PDFBackend(Protocol):
    """Protocol defining backend operations for PDF loading."""

    def load(self, data: bytes, password: str | None = None) -> BackendDocument:
        """Parse ``data`` and return a backend document wrapper."""
