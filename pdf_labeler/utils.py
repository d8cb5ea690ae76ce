"""Utility helpers for pdf_labeler."""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, Optional, Union

import reportlab

PathLike = Union[str, os.PathLike[str]]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
ELLIPSIS = "..."


def configure_logging(level: int = logging.INFO, log_file: Optional[PathLike] = None) -> None:
    """Configure package-wide logging.

    When ``log_file`` is given, records are also appended to that file.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(str(log_file), mode="a", encoding="utf-8"))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


def to_path(path: PathLike) -> Path:
    """Normalize an input path to :class:`Path`."""
    return Path(path).expanduser().resolve()


@contextmanager
def time_block(logger: logging.Logger, message: str) -> Iterator[None]:
    """Context manager that logs the execution time of a code block."""
    start = datetime.now(tz=timezone.utc)
    logger.debug("Starting %s", message)
    try:
        yield
    finally:
        end = datetime.now(tz=timezone.utc)
        elapsed = (end - start).total_seconds()
        logger.info("%s completed in %.2fs", message, elapsed)


def default_font_path() -> Path:
    """Path of the Bitstream Vera Sans font shipped with reportlab."""
    return Path(reportlab.__file__).resolve().parent / "fonts" / "Vera.ttf"


def truncate_label(text: str, limit: Optional[int]) -> str:
    """Shorten ``text`` to at most ``limit`` characters, ending with ``...``."""
    if limit is None or len(text) <= limit:
        return text
    if limit <= len(ELLIPSIS):
        return text[:limit]
    return text[: limit - len(ELLIPSIS)] + ELLIPSIS


def write_bytes_atomic(destination: Path, data: bytes) -> None:
    """Write ``data`` to ``destination`` in one step.

    The bytes go to a temporary file next to ``destination`` which then
    replaces it, so a failed write never leaves a partial file behind.
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.", suffix=".tmp", dir=str(destination.parent)
    )
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, destination)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500 KB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
