"""pypdf backend implementation for PDF Labeler.

Pages, boxes, annotations and serialization are handled by ``pypdf``. Fonts
and drawing go through ``reportlab``: every drawing call is recorded on its
page and rendered into a single overlay document when the document is
serialized, so the embedded font subset is shared by all pages.
"""

from __future__ import annotations

import hashlib
import io
import logging
import math
from typing import Dict, List, Sequence, Tuple

from pypdf import PageObject, PdfReader, PdfWriter
from pypdf.annotations import Link
from pypdf.errors import PdfReadError
from pypdf.generic import NameObject, RectangleObject
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from ..exceptions import DocumentLoadError, EncryptedPDFError, FontEmbeddingError
from ..types import Color, LinkAnnotation
from .base import BackendDocument, DrawOperation, PDFBackend, RectangleOperation, TextOperation

LOGGER = logging.getLogger(__name__)

# Boxes that track the MediaBox when they were identical to it before a resize.
LINKED_BOXES = ("/CropBox", "/BleedBox", "/TrimBox", "/ArtBox")


def _same_box(left: Sequence[float], right: Sequence[float]) -> bool:
    if len(left) != len(right):
        return False
    return all(math.isclose(float(a), float(b), abs_tol=1e-6) for a, b in zip(left, right))


class ReportlabFont:
    """TrueType font registered with reportlab."""

    def __init__(self, font: TTFont) -> None:
        self._font = font
        self.name: str = font.fontName

    def height_at_size(self, size: float) -> float:
        face = self._font.face
        return (face.ascent - face.descent) * size / 1000.0

    def width_of_text(self, text: str, size: float) -> float:
        if not text:
            return 0.0
        return float(self._font.stringWidth(text, size))


class PypdfPage:
    """A writer-owned page that records drawing operations."""

    def __init__(self, page: PageObject, index: int, writer: PdfWriter) -> None:
        self._page = page
        self._writer = writer
        self.index = index
        self.operations: List[DrawOperation] = []

    @property
    def origin(self) -> Tuple[float, float]:
        box = self._page.mediabox
        return float(box.left), float(box.bottom)

    def get_size(self) -> Tuple[float, float]:
        box = self._page.mediabox
        return float(box.width), float(box.height)

    def set_size(self, width: float, height: float) -> None:
        left, bottom = self.origin
        old_box = [float(value) for value in self._page.mediabox]
        new_box = [left, bottom, left + width, bottom + height]

        for name in LINKED_BOXES:
            if name in self._page and _same_box(self._page[name], old_box):
                self._page[NameObject(name)] = RectangleObject(new_box)

        self._page.mediabox = RectangleObject(new_box)

    def draw_text(
        self,
        text: str,
        *,
        x: float,
        y: float,
        font: ReportlabFont,
        size: float,
        color: Color,
    ) -> None:
        self.operations.append(TextOperation(text, x, y, font.name, size, color))

    def draw_rectangle(
        self,
        *,
        x: float,
        y: float,
        width: float,
        height: float,
        color: Color,
    ) -> None:
        self.operations.append(RectangleOperation(x, y, width, height, color))

    @property
    def annotation_count(self) -> int:
        annots = self._page.get("/Annots")
        if annots is None:
            return 0
        return len(annots.get_object())

    def set_annotations(self, annotations: Sequence[LinkAnnotation]) -> None:
        if "/Annots" in self._page:
            del self._page["/Annots"]
        for annotation in annotations:
            self.add_annotation(annotation)

    def add_annotation(self, annotation: LinkAnnotation) -> None:
        left, bottom = self.origin
        x1, y1, x2, y2 = annotation.rect
        link = Link(
            rect=(left + x1, bottom + y1, left + x2, bottom + y2),
            url=annotation.uri,
        )
        self._writer.add_annotation(page_number=self.index, annotation=link)

    def merge_overlay(self, overlay_page: PageObject) -> None:
        left, bottom = self.origin
        self._page.merge_translated_page(overlay_page, left, bottom)


def _render_operation(overlay: canvas.Canvas, operation: DrawOperation) -> None:
    overlay.setFillColorRGB(*operation.color)
    if isinstance(operation, RectangleOperation):
        overlay.rect(
            operation.x,
            operation.y,
            operation.width,
            operation.height,
            stroke=0,
            fill=1,
        )
    else:
        overlay.setFont(operation.font_name, operation.size)
        overlay.drawString(operation.x, operation.y, operation.text)


class PypdfDocument(BackendDocument):
    """In-memory document backed by a cloned :class:`PdfWriter`."""

    def __init__(self, writer: PdfWriter, *, file_size: int = 0) -> None:
        self.writer = writer
        self.file_size = file_size
        self._pages = [PypdfPage(page, index, writer) for index, page in enumerate(writer.pages)]
        self._fonts: Dict[str, ReportlabFont] = {}

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def pages(self) -> List[PypdfPage]:
        return list(self._pages)

    def embed_font(self, data: bytes) -> ReportlabFont:
        if not data:
            raise FontEmbeddingError("Font data is empty.")

        digest = hashlib.sha1(data).hexdigest()[:12]
        if digest in self._fonts:
            return self._fonts[digest]

        name = f"PDFLabeler-{digest}"
        try:
            ttf = TTFont(name, io.BytesIO(data))
        except TTFError as exc:
            raise FontEmbeddingError(f"Unsupported or invalid TrueType font. Error: {exc}") from exc
        except Exception as exc:
            raise FontEmbeddingError(f"Unexpected error loading font. Error: {exc}") from exc

        pdfmetrics.registerFont(ttf)
        font = ReportlabFont(ttf)
        self._fonts[digest] = font
        LOGGER.debug("Embedded font %s (%s bytes)", name, len(data))
        return font

    def serialize(self) -> bytes:
        self._apply_overlays()
        buffer = io.BytesIO()
        self.writer.write(buffer)
        return buffer.getvalue()

    def _apply_overlays(self) -> None:
        pending = [page for page in self._pages if page.operations]
        if not pending:
            return

        buffer = io.BytesIO()
        overlay = canvas.Canvas(buffer)
        for page in pending:
            overlay.setPageSize(page.get_size())
            for operation in page.operations:
                _render_operation(overlay, operation)
            overlay.showPage()
        overlay.save()

        buffer.seek(0)
        overlay_reader = PdfReader(buffer)
        for page, overlay_page in zip(pending, overlay_reader.pages):
            page.merge_overlay(overlay_page)
            page.operations.clear()

        LOGGER.debug("Merged overlay onto %d page(s)", len(pending))


class PypdfBackend(PDFBackend):
    """Backend implementation that uses `pypdf` and `reportlab` under the hood."""

    def load(self, data: bytes, password: str | None = None) -> PypdfDocument:
        if not data:
            raise DocumentLoadError("PDF data is empty.")

        try:
            reader = PdfReader(io.BytesIO(data))
        except PdfReadError as exc:
            raise DocumentLoadError(f"Corrupted or invalid PDF. Error: {exc}") from exc
        except Exception as exc:
            raise DocumentLoadError(f"Unexpected error reading PDF. Error: {exc}") from exc

        if reader.is_encrypted:
            if password:
                if reader.decrypt(password) == 0:
                    raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")
            else:
                raise EncryptedPDFError("PDF is encrypted. Supply a password to process this file.")

        try:
            num_pages = len(reader.pages)
            writer = PdfWriter(clone_from=reader)
        except Exception as exc:
            raise DocumentLoadError(f"Unable to read PDF page tree. Error: {exc}") from exc

        if num_pages == 0:
            raise DocumentLoadError("PDF has no pages.")

        return PypdfDocument(writer, file_size=len(data))
