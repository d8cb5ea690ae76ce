"""Page decoration built around a :class:`BackendDocument`.

Every page grows by a header band at the top. The band carries a left label
(with ``%Page``/``%EndPage`` substituted) and a right-aligned label; a small
footer caption, optionally clickable, is centered near the page bottom.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, List, Optional, Set, Tuple

from .backends.base import BackendDocument, BackendFont, BackendPage
from .exceptions import DecorationError, FontEmbeddingError, PDFLabelerException
from .types import (
    DecorationConfig,
    LayoutConstants,
    LayoutMetrics,
    LinkAnnotation,
    PageDecoration,
    Rect,
)

LOGGER = logging.getLogger(__name__)

PAGE_TOKEN = "%Page"
END_PAGE_TOKEN = "%EndPage"

Size = Tuple[float, float]


def substitute_tokens(template: str, page_number: int, page_count: int) -> str:
    """Replace every ``%Page`` and then every ``%EndPage`` in ``template``."""

    substitutions = (
        (PAGE_TOKEN, str(page_number)),
        (END_PAGE_TOKEN, str(page_count)),
    )
    text = template
    for token, value in substitutions:
        text = text.replace(token, value)
    return text


def compute_layout_metrics(
    font: Optional[BackendFont],
    constants: Optional[LayoutConstants] = None,
) -> LayoutMetrics:
    """Measure ``font`` once and derive the run-wide layout."""

    constants = constants or LayoutConstants()
    if font is None:
        raise FontEmbeddingError("No embedded font available to measure label text.")

    try:
        font_height = float(font.height_at_size(constants.header_font_size))
        footer_height = float(font.height_at_size(constants.footer_font_size))
    except Exception as exc:
        raise FontEmbeddingError(f"Unable to measure embedded font. Error: {exc}") from exc

    for value in (font_height, footer_height):
        if not math.isfinite(value) or value <= 0:
            raise FontEmbeddingError(f"Embedded font reported an unusable height: {value}")

    return LayoutMetrics(
        font_size=constants.header_font_size,
        vertical_margin=constants.vertical_margin,
        horizontal_margin=constants.horizontal_margin,
        font_height=font_height,
        header_band_height=font_height + 2 * constants.vertical_margin,
        header_baseline_shift=constants.header_font_size + constants.vertical_margin,
        footer_font_size=constants.footer_font_size,
        footer_text_height=footer_height,
    )


def extend_canvas(page: BackendPage, metrics: LayoutMetrics) -> Tuple[Size, Size]:
    """Grow ``page`` upwards by the header band. Returns (old size, new size)."""

    width, height = page.get_size()
    new_height = height + metrics.header_band_height
    page.set_size(width, new_height)
    return (width, height), (width, new_height)


def draw_header_band(
    page: BackendPage,
    size: Size,
    metrics: LayoutMetrics,
    constants: LayoutConstants,
) -> None:
    width, height = size
    page.draw_rectangle(
        x=0,
        y=height - metrics.header_band_height,
        width=width,
        height=metrics.header_band_height,
        color=constants.band_color,
    )


def draw_header_labels(
    page: BackendPage,
    size: Size,
    left_text: str,
    right_text: str,
    font: BackendFont,
    metrics: LayoutMetrics,
    constants: LayoutConstants,
) -> Tuple[Size, Size, float]:
    """Draw both header labels on a shared baseline.

    Returns the left origin, the right origin and the measured right width.
    """

    width, height = size
    baseline = height - metrics.header_baseline_shift

    left_origin = (metrics.horizontal_margin, baseline)
    page.draw_text(
        left_text,
        x=left_origin[0],
        y=baseline,
        font=font,
        size=metrics.font_size,
        color=constants.header_color,
    )

    right_width = font.width_of_text(right_text, metrics.font_size)
    right_origin = (width - right_width - metrics.horizontal_margin, baseline)
    page.draw_text(
        right_text,
        x=right_origin[0],
        y=baseline,
        font=font,
        size=metrics.font_size,
        color=constants.header_color,
    )
    return left_origin, right_origin, right_width


def footer_box(
    page_width: float,
    text: str,
    font: BackendFont,
    metrics: LayoutMetrics,
    constants: LayoutConstants,
) -> Rect:
    """Box of the footer caption, centered on ``width / 2 - horizontal_margin``."""

    text_width = font.width_of_text(text, metrics.footer_font_size)
    x = page_width / 2 - metrics.horizontal_margin - text_width / 2
    y = constants.footer_offset
    return (x, y, x + text_width, y + metrics.footer_text_height)


def draw_footer(
    page: BackendPage,
    page_width: float,
    text: str,
    link_target: Optional[str],
    font: BackendFont,
    metrics: LayoutMetrics,
    constants: LayoutConstants,
    *,
    keep_annotations: bool = False,
) -> Tuple[Rect, Optional[LinkAnnotation]]:
    box = footer_box(page_width, text, font, metrics, constants)
    page.draw_text(
        text,
        x=box[0],
        y=box[1],
        font=font,
        size=metrics.footer_font_size,
        color=constants.footer_color,
    )

    if not text or not link_target:
        return box, None

    link = LinkAnnotation(rect=box, uri=link_target)
    if keep_annotations:
        page.add_annotation(link)
    else:
        page.set_annotations([link])
    return box, link


class PageDecorator:
    """Decorates the pages of one document, each exactly once."""

    def __init__(
        self,
        font: BackendFont,
        config: DecorationConfig,
        metrics: LayoutMetrics,
        constants: Optional[LayoutConstants] = None,
    ) -> None:
        self.font = font
        self.config = config
        self.metrics = metrics
        self.constants = constants or LayoutConstants()
        self._decorated: Set[int] = set()

    def decorate(self, page: BackendPage, index: int, page_count: int) -> PageDecoration:
        if id(page) in self._decorated:
            raise DecorationError(f"Page {index + 1} has already been decorated.")
        self._decorated.add(id(page))

        try:
            return self._decorate(page, index, page_count)
        except PDFLabelerException:
            raise
        except Exception as exc:
            raise DecorationError(f"Failed to decorate page {index + 1}. Error: {exc}") from exc

    def _decorate(self, page: BackendPage, index: int, page_count: int) -> PageDecoration:
        original_size, new_size = extend_canvas(page, self.metrics)
        draw_header_band(page, new_size, self.metrics, self.constants)

        left_text = substitute_tokens(self.config.left_template, index + 1, page_count)
        left_origin, right_origin, right_width = draw_header_labels(
            page,
            new_size,
            left_text,
            self.config.right_text,
            self.font,
            self.metrics,
            self.constants,
        )

        box, link = draw_footer(
            page,
            original_size[0],
            self.config.footer_text,
            self.config.footer_link_target,
            self.font,
            self.metrics,
            self.constants,
            keep_annotations=self.config.keep_annotations,
        )

        LOGGER.debug(
            "Page %d: %.1fx%.1f -> %.1fx%.1f, left=%r",
            index + 1,
            original_size[0],
            original_size[1],
            new_size[0],
            new_size[1],
            left_text,
        )

        return PageDecoration(
            index=index,
            original_size=original_size,
            new_size=new_size,
            left_text=left_text,
            left_origin=left_origin,
            right_origin=right_origin,
            right_width=right_width,
            footer_box=box,
            link=link,
        )


def decorate_document(
    document: BackendDocument,
    font: BackendFont,
    config: DecorationConfig,
    constants: Optional[LayoutConstants] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> List[PageDecoration]:
    """Decorate every page of ``document`` in order."""

    constants = constants or LayoutConstants()
    metrics = compute_layout_metrics(font, constants)
    LOGGER.debug(
        "Header band height %.2f, baseline shift %.2f",
        metrics.header_band_height,
        metrics.header_baseline_shift,
    )

    decorator = PageDecorator(font, config, metrics, constants)
    pages = document.pages()
    page_count = len(pages)

    decorations: List[PageDecoration] = []
    for index, page in enumerate(pages):
        decorations.append(decorator.decorate(page, index, page_count))
        if progress_callback:
            progress_callback(index + 1, page_count)

    return decorations
