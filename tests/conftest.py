from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple
import sys

import pytest
from pypdf import PdfWriter
from pypdf.annotations import Link
from pypdf.generic import NameObject, RectangleObject

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from pdf_labeler.types import DecorationConfig, LayoutConstants, LinkAnnotation
from pdf_labeler.utils import default_font_path


class FakeFont:
    """Font double: every glyph is half the font size wide."""

    name = "Fake"

    def __init__(self, height_factor: float = 1.2) -> None:
        self.height_factor = height_factor

    def height_at_size(self, size: float) -> float:
        return self.height_factor * size

    def width_of_text(self, text: str, size: float) -> float:
        return 0.5 * size * len(text)


class FakePage:
    """Page double recording every call made by the decorator."""

    def __init__(
        self,
        index: int = 0,
        width: float = 200,
        height: float = 300,
        annotations: Optional[List[object]] = None,
    ) -> None:
        self.index = index
        self.width = width
        self.height = height
        self.operations: List[object] = []
        self.rectangles: List[dict] = []
        self.texts: List[dict] = []
        self.annotations: List[object] = list(annotations or [])
        self.resize_calls = 0

    def get_size(self) -> Tuple[float, float]:
        return self.width, self.height

    def set_size(self, width: float, height: float) -> None:
        self.resize_calls += 1
        self.width = width
        self.height = height

    def draw_text(self, text, *, x, y, font, size, color) -> None:
        self.texts.append({"text": text, "x": x, "y": y, "size": size, "color": color})

    def draw_rectangle(self, *, x, y, width, height, color) -> None:
        self.rectangles.append({"x": x, "y": y, "width": width, "height": height, "color": color})

    @property
    def annotation_count(self) -> int:
        return len(self.annotations)

    def set_annotations(self, annotations: Sequence[LinkAnnotation]) -> None:
        self.annotations = list(annotations)

    def add_annotation(self, annotation: LinkAnnotation) -> None:
        self.annotations.append(annotation)


class FakeDocument:
    def __init__(self, pages: Sequence[FakePage]) -> None:
        self._pages = list(pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def pages(self) -> List[FakePage]:
        return list(self._pages)


@pytest.fixture()
def fake_font() -> FakeFont:
    return FakeFont()


@pytest.fixture()
def page_factory() -> Callable[..., FakePage]:
    return FakePage


@pytest.fixture()
def document_factory() -> Callable[..., FakeDocument]:
    def _create(count: int, width: float = 200, height: float = 300) -> FakeDocument:
        return FakeDocument([FakePage(index, width, height) for index in range(count)])

    return _create


@pytest.fixture()
def constants() -> LayoutConstants:
    return LayoutConstants()


@pytest.fixture()
def font_path() -> Path:
    return default_font_path()


@pytest.fixture()
def pdf_factory(tmp_path: Path) -> Callable[..., Path]:
    def _create(
        filename: str = "input.pdf",
        pages: int = 2,
        width: float = 200,
        height: float = 200,
        link: Optional[str] = None,
        crop_box: bool = False,
        password: Optional[str] = None,
    ) -> Path:
        path = tmp_path / filename
        writer = PdfWriter()
        for index in range(pages):
            page = writer.add_blank_page(width=width, height=height)
            if crop_box:
                page[NameObject("/CropBox")] = RectangleObject([0, 0, width, height])
            if link is not None:
                writer.add_annotation(
                    page_number=index,
                    annotation=Link(rect=(10, 10, 60, 30), url=link),
                )
        if password is not None:
            writer.encrypt(password)
        with path.open("wb") as handle:
            writer.write(handle)
        return path

    return _create


@pytest.fixture()
def sample_pdf(pdf_factory: Callable[..., Path]) -> Path:
    return pdf_factory("sample.pdf", pages=2)


@pytest.fixture()
def empty_pdf(tmp_path: Path) -> Path:
    pdf_path = tmp_path / "empty.pdf"
    writer = PdfWriter()
    with pdf_path.open("wb") as stream:
        writer.write(stream)
    return pdf_path


@pytest.fixture()
def config_factory(tmp_path: Path, font_path: Path) -> Callable[..., DecorationConfig]:
    def _create(input_path: Path, **overrides) -> DecorationConfig:
        values = {
            "input_path": str(input_path),
            "output_path": str(tmp_path / "labeled.pdf"),
            "font_path": str(font_path),
            "left_template": "Page %Page of %EndPage",
            "right_text": "DRAFT",
            "footer_text": "confidential",
            "footer_link_target": "https://example.com",
        }
        values.update(overrides)
        return DecorationConfig(**values)

    return _create
