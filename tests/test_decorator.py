from __future__ import annotations

import pytest

from pdf_labeler.decorator import (
    PageDecorator,
    compute_layout_metrics,
    decorate_document,
    draw_footer,
    draw_header_band,
    draw_header_labels,
    extend_canvas,
    substitute_tokens,
)
from pdf_labeler.exceptions import DecorationError, FontEmbeddingError
from pdf_labeler.types import DecorationConfig, LayoutConstants, LinkAnnotation


def _config(**overrides) -> DecorationConfig:
    values = {
        "input_path": "in.pdf",
        "output_path": "out.pdf",
        "font_path": "font.ttf",
        "left_template": "Page %Page of %EndPage",
        "right_text": "DRAFT",
        "footer_text": "confidential",
        "footer_link_target": "https://example.com",
    }
    values.update(overrides)
    return DecorationConfig(**values)


# ----------------------------------------------------------------------
# Token substitution
# ----------------------------------------------------------------------
def test_substitute_tokens_replaces_page_and_total() -> None:
    assert substitute_tokens("Page %Page of %EndPage", 1, 2) == "Page 1 of 2"


def test_substitute_tokens_without_tokens_is_verbatim() -> None:
    assert substitute_tokens("Annual report", 3, 9) == "Annual report"


def test_substitute_tokens_replaces_every_occurrence() -> None:
    text = substitute_tokens("%Page/%EndPage (%Page)", 4, 7)
    assert text == "4/7 (4)"
    assert "%Page" not in text
    assert "%EndPage" not in text


def test_substitute_tokens_empty_template() -> None:
    assert substitute_tokens("", 1, 1) == ""


# ----------------------------------------------------------------------
# Layout metrics
# ----------------------------------------------------------------------
def test_compute_layout_metrics(fake_font, constants: LayoutConstants) -> None:
    metrics = compute_layout_metrics(fake_font, constants)

    assert metrics.font_size == 14
    assert metrics.font_height == pytest.approx(16.8)
    assert metrics.header_band_height == pytest.approx(16.8 + 2 * constants.vertical_margin)
    assert metrics.header_baseline_shift == pytest.approx(14 + constants.vertical_margin)
    assert metrics.footer_font_size == 5
    assert metrics.footer_text_height == pytest.approx(6.0)


def test_default_layout_constants() -> None:
    constants = LayoutConstants()

    assert constants.vertical_margin == 4
    assert constants.horizontal_margin == 12
    assert constants.footer_offset == 5
    assert constants.band_color == (236 / 256, 236 / 256, 239 / 256)
    assert constants.footer_color == (0.5, 0.5, 0.5)


def test_default_metrics_band_and_baseline(fake_font) -> None:
    metrics = compute_layout_metrics(fake_font)

    assert metrics.header_band_height == pytest.approx(16.8 + 8)
    assert metrics.header_baseline_shift == pytest.approx(18)
    assert metrics.horizontal_margin == 12


def test_compute_layout_metrics_requires_font(constants: LayoutConstants) -> None:
    with pytest.raises(FontEmbeddingError):
        compute_layout_metrics(None, constants)


def test_compute_layout_metrics_rejects_unusable_height(constants: LayoutConstants) -> None:
    class FlatFont:
        name = "Flat"

        def height_at_size(self, size):
            return 0.0

    with pytest.raises(FontEmbeddingError):
        compute_layout_metrics(FlatFont(), constants)


def test_compute_layout_metrics_wraps_measurement_errors(constants: LayoutConstants) -> None:
    class BrokenFont:
        name = "Broken"

        def height_at_size(self, size):
            raise RuntimeError("no metrics table")

    with pytest.raises(FontEmbeddingError, match="no metrics table"):
        compute_layout_metrics(BrokenFont(), constants)


# ----------------------------------------------------------------------
# Canvas extension and header band
# ----------------------------------------------------------------------
def test_extend_canvas_grows_height_only(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300)

    original, new = extend_canvas(page, metrics)

    assert original == (200, 300)
    assert new == (200, pytest.approx(300 + metrics.header_band_height))
    assert page.get_size() == new


def test_extend_canvas_is_not_idempotent(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300)

    extend_canvas(page, metrics)
    extend_canvas(page, metrics)

    assert page.height == pytest.approx(300 + 2 * metrics.header_band_height)


def test_header_band_fills_exactly_the_added_region(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300)

    _, new_size = extend_canvas(page, metrics)
    draw_header_band(page, new_size, metrics, constants)

    (band,) = page.rectangles
    assert band["x"] == 0
    assert band["width"] == 200
    assert band["y"] == pytest.approx(300)
    assert band["y"] + band["height"] == pytest.approx(new_size[1])
    assert band["color"] == constants.band_color


# ----------------------------------------------------------------------
# Header labels
# ----------------------------------------------------------------------
@pytest.mark.parametrize("right_text", ["DRAFT", "W", "A much longer right label"])
def test_right_label_is_right_aligned(fake_font, constants, page_factory, right_text) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=400, height=300)

    left_origin, right_origin, right_width = draw_header_labels(
        page, (400, 326.8), "left", right_text, fake_font, metrics, constants
    )

    assert right_width == fake_font.width_of_text(right_text, 14)
    assert right_origin[0] + right_width == pytest.approx(400 - constants.horizontal_margin)
    assert left_origin == (constants.horizontal_margin, pytest.approx(326.8 - 18))
    assert right_origin[1] == left_origin[1]


def test_empty_right_label_draws_without_error(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300)

    _, right_origin, right_width = draw_header_labels(
        page, (200, 300), "", "", fake_font, metrics, constants
    )

    assert right_width == 0
    assert right_origin[0] == pytest.approx(200 - constants.horizontal_margin)
    assert [entry["text"] for entry in page.texts] == ["", ""]


# ----------------------------------------------------------------------
# Footer and link
# ----------------------------------------------------------------------
def test_footer_is_centered_left_of_page_middle(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300)

    box, link = draw_footer(page, 200, "confidential", None, fake_font, metrics, constants)

    text_width = fake_font.width_of_text("confidential", 5)
    assert (box[0] + box[2]) / 2 == pytest.approx(200 / 2 - constants.horizontal_margin)
    assert box[2] - box[0] == pytest.approx(text_width)
    assert box[1] == constants.footer_offset
    assert box[3] - box[1] == pytest.approx(metrics.footer_text_height)
    assert link is None
    assert page.annotations == []
    (footer,) = page.texts
    assert footer["size"] == 5
    assert footer["color"] == constants.footer_color


def test_footer_link_replaces_existing_annotations(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300, annotations=["existing"])

    box, link = draw_footer(
        page, 200, "confidential", "https://example.com", fake_font, metrics, constants
    )

    assert link == LinkAnnotation(rect=box, uri="https://example.com")
    assert page.annotations == [link]


def test_footer_link_can_keep_existing_annotations(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300, annotations=["existing"])

    _, link = draw_footer(
        page,
        200,
        "confidential",
        "https://example.com",
        fake_font,
        metrics,
        constants,
        keep_annotations=True,
    )

    assert page.annotations == ["existing", link]


def test_empty_footer_never_gets_a_link(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    page = page_factory(width=200, height=300, annotations=["existing"])

    _, link = draw_footer(page, 200, "", "https://example.com", fake_font, metrics, constants)

    assert link is None
    assert page.annotations == ["existing"]


# ----------------------------------------------------------------------
# Page decorator
# ----------------------------------------------------------------------
def test_page_decorator_decorates_page(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    decorator = PageDecorator(fake_font, _config(), metrics, constants)
    page = page_factory(width=200, height=300)

    decoration = decorator.decorate(page, 0, 2)

    assert decoration.page_number == 1
    assert decoration.original_size == (200, 300)
    assert decoration.new_size[1] == pytest.approx(300 + metrics.header_band_height)
    assert decoration.left_text == "Page 1 of 2"
    assert decoration.right_origin[0] == pytest.approx(200 - 35 - 12)
    assert decoration.footer_box == pytest.approx((73, 5, 103, 11))
    assert decoration.link is not None
    assert [entry["text"] for entry in page.texts] == ["Page 1 of 2", "DRAFT", "confidential"]
    assert len(page.rectangles) == 1


def test_page_decorator_refuses_second_pass(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    decorator = PageDecorator(fake_font, _config(), metrics, constants)
    page = page_factory(width=200, height=300)

    decorator.decorate(page, 0, 1)
    with pytest.raises(DecorationError):
        decorator.decorate(page, 0, 1)

    assert page.resize_calls == 1
    assert page.height == pytest.approx(300 + metrics.header_band_height)


def test_page_decorator_wraps_drawing_failures(fake_font, constants, page_factory) -> None:
    metrics = compute_layout_metrics(fake_font, constants)
    decorator = PageDecorator(fake_font, _config(), metrics, constants)
    page = page_factory()

    def broken_draw(*args, **kwargs):
        raise RuntimeError("content stream locked")

    page.draw_rectangle = broken_draw

    with pytest.raises(DecorationError, match="page 1"):
        decorator.decorate(page, 0, 1)


# ----------------------------------------------------------------------
# Whole document
# ----------------------------------------------------------------------
def test_decorate_document_numbers_pages(fake_font, constants, document_factory) -> None:
    document = document_factory(3)
    progress = []

    decorations = decorate_document(
        document,
        fake_font,
        _config(),
        constants,
        progress_callback=lambda current, total: progress.append((current, total)),
    )

    assert [d.left_text for d in decorations] == ["Page 1 of 3", "Page 2 of 3", "Page 3 of 3"]
    assert progress == [(1, 3), (2, 3), (3, 3)]
    for page in document.pages():
        assert page.resize_calls == 1
        assert len(page.annotations) == 1


def test_decorate_document_extends_each_page_once(fake_font, constants, document_factory) -> None:
    document = document_factory(2, width=612, height=792)

    decorations = decorate_document(document, fake_font, _config(), constants)
    band = compute_layout_metrics(fake_font, constants).header_band_height

    for decoration, page in zip(decorations, document.pages()):
        assert page.width == 612
        assert page.height == pytest.approx(792 + band)
        assert decoration.new_size[1] - decoration.original_size[1] == pytest.approx(band)


def test_decorate_document_without_link(fake_font, constants, document_factory) -> None:
    document = document_factory(2)

    decorations = decorate_document(
        document, fake_font, _config(footer_link_target=None), constants
    )

    assert all(d.link is None for d in decorations)
    assert all(page.annotations == [] for page in document.pages())


def test_decorate_document_rejects_repeated_page(fake_font, constants, page_factory) -> None:
    page = page_factory()

    class RepeatingDocument:
        def pages(self):
            return [page, page]

    document = RepeatingDocument()

    with pytest.raises(DecorationError, match="already been decorated"):
        decorate_document(document, fake_font, _config(), constants)

    assert page.resize_calls == 1
