"""Information utilities for labeled and unlabeled PDFs."""

from __future__ import annotations

import logging
from typing import Optional

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import DocumentLoadError
from .types import PDFInfo
from .utils import PathLike, to_path

LOGGER = logging.getLogger(__name__)


def get_pdf_info(path: PathLike, password: Optional[str] = None) -> PDFInfo:
    """Return :class:`PDFInfo` for the PDF located at *path*."""

    pdf_path = to_path(path)
    if not pdf_path.is_file():
        raise DocumentLoadError(f"PDF file not found: {pdf_path}")

    try:
        reader = PdfReader(str(pdf_path))
    except PdfReadError as exc:
        raise DocumentLoadError(f"Corrupted or invalid PDF file: {pdf_path}. Error: {exc}") from exc

    info = PDFInfo(
        num_pages=0,
        file_size=pdf_path.stat().st_size,
        is_encrypted=reader.is_encrypted,
    )
    if reader.is_encrypted and not (password and reader.decrypt(password) != 0):
        LOGGER.debug("Skipping page inspection of encrypted %s", pdf_path)
        return info

    pages = reader.pages
    info.num_pages = len(pages)
    if pages:
        box = pages[0].mediabox
        info.page_size = (float(box.width), float(box.height))
    for page in pages:
        annots = page.get("/Annots")
        if annots is not None:
            info.annotations += len(annots.get_object())

    LOGGER.debug("PDF info for %s: %s", pdf_path, info)
    return info
