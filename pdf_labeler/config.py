"""Assembly of a :class:`DecorationConfig` from raw invocation values."""

from __future__ import annotations

import logging
from typing import Optional

from .exceptions import ConfigurationError
from .types import DecorationConfig
from .utils import default_font_path, to_path, truncate_label

LOGGER = logging.getLogger(__name__)


def resolve_config(
    input_path: Optional[str],
    output_path: Optional[str],
    *,
    left_template: Optional[str] = None,
    right_text: Optional[str] = None,
    footer_text: Optional[str] = None,
    footer_link_target: Optional[str] = None,
    font_path: Optional[str] = None,
    password: Optional[str] = None,
    keep_annotations: bool = False,
    max_right_length: Optional[int] = None,
) -> DecorationConfig:
    """Build the run configuration.

    Input and output paths are mandatory and must differ. Label texts default
    to empty strings, an empty link target means "no link", and a missing
    font falls back to the font bundled with reportlab.
    """

    if not input_path:
        raise ConfigurationError("An input PDF path is required.")
    if not output_path:
        raise ConfigurationError("An output PDF path is required.")
    if to_path(input_path) == to_path(output_path):
        raise ConfigurationError(
            f"Output path must differ from the input path: {output_path}"
        )
    if max_right_length is not None and max_right_length < 1:
        raise ConfigurationError(
            f"Maximum right label length must be positive, got {max_right_length}."
        )

    if not font_path:
        font_path = str(default_font_path())
        LOGGER.debug("No font supplied, using bundled font %s", font_path)

    return DecorationConfig(
        input_path=input_path,
        output_path=output_path,
        font_path=font_path,
        left_template=left_template or "",
        right_text=truncate_label(right_text or "", max_right_length),
        footer_text=footer_text or "",
        footer_link_target=footer_link_target or None,
        password=password or None,
        keep_annotations=keep_annotations,
    )
