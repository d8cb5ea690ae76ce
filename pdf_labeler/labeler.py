"""Labeling pipeline: load, decorate every page, write atomically."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional

from .backends import PypdfBackend
from .backends.base import BackendDocument, BackendFont, PDFBackend
from .decorator import decorate_document
from .exceptions import (
    DocumentLoadError,
    FontEmbeddingError,
    PDFLabelerException,
    SerializationError,
)
from .types import DecorationConfig, LabelResult, LayoutConstants, PageDecoration
from .utils import time_block, to_path, write_bytes_atomic

LOGGER = logging.getLogger(__name__)


class PDFLabeler:
    """Stamps header band, labels and footer onto every page of one PDF."""

    def __init__(
        self,
        config: DecorationConfig,
        *,
        constants: Optional[LayoutConstants] = None,
        backend: Optional[PDFBackend] = None,
    ) -> None:
        self.config = config
        self.constants = constants or LayoutConstants()
        self.backend: PDFBackend = backend or PypdfBackend()
        self.source = to_path(config.input_path)
        self.destination = to_path(config.output_path)

    def _load_document(self) -> BackendDocument:
        try:
            raw_bytes = self.source.read_bytes()
        except OSError as exc:
            raise DocumentLoadError(
                f"Unable to read PDF file: {self.source}. Error: {exc}"
            ) from exc

        document = self.backend.load(raw_bytes, password=self.config.password)
        LOGGER.info("Loaded %s (%d pages)", self.source, document.page_count)
        return document

    def _embed_font(self, document: BackendDocument) -> BackendFont:
        font_path = Path(self.config.font_path).expanduser()
        try:
            font_bytes = font_path.read_bytes()
        except OSError as exc:
            raise FontEmbeddingError(
                f"Unable to read font file: {font_path}. Error: {exc}"
            ) from exc
        return document.embed_font(font_bytes)

    def _serialize(self, document: BackendDocument) -> bytes:
        try:
            return document.serialize()
        except PDFLabelerException:
            raise
        except Exception as exc:
            raise SerializationError(f"Unable to serialize labeled PDF. Error: {exc}") from exc

    def _write(self, data: bytes) -> None:
        try:
            write_bytes_atomic(self.destination, data)
        except OSError as exc:
            raise SerializationError(
                f"Unable to write file: {self.destination}. Error: {exc}"
            ) from exc

    def run(
        self,
        progress_callback: Optional[Callable[[int, int], None]] = None,
    ) -> LabelResult:
        LOGGER.info("Labeling %s -> %s", self.source, self.destination)

        document = self._load_document()
        font = self._embed_font(document)

        with time_block(LOGGER, "Page decoration"):
            decorations: List[PageDecoration] = decorate_document(
                document,
                font,
                self.config,
                self.constants,
                progress_callback=progress_callback,
            )

        data = self._serialize(document)
        self._write(data)
        LOGGER.info("Wrote %s (%d bytes)", self.destination, len(data))

        return LabelResult(
            output_path=str(self.destination),
            source_file=str(self.source),
            page_count=len(decorations),
            output_size=len(data),
            links_added=sum(1 for page in decorations if page.link is not None),
            pages=decorations,
        )


def label_pdf(
    config: DecorationConfig,
    *,
    constants: Optional[LayoutConstants] = None,
    backend: Optional[PDFBackend] = None,
    progress_callback: Optional[Callable[[int, int], None]] = None,
) -> LabelResult:
    """Label the PDF described by ``config`` and write it to its output path."""

    labeler = PDFLabeler(config, constants=constants, backend=backend)
    return labeler.run(progress_callback=progress_callback)
