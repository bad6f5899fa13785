"""Deterministic output filenames for extracted images."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


DEFAULT_FORMAT = "image/png"
DEFAULT_EXTENSION = "png"


def _format_of(image: Any) -> str | None:
    if isinstance(image, Mapping):
        return image.get("format")
    return getattr(image, "format", None)


def extension_for(format: str | None) -> str:
    """Return the MIME subtype of ``format`` ('image/jpeg' -> 'jpeg')."""
    _, _, subtype = (format or DEFAULT_FORMAT).partition("/")
    return subtype or DEFAULT_EXTENSION


def filename_for(image: Any, position_index: int) -> str:
    """
    Build the output filename for an image.

    Numbering is 1-based for users: position 0 becomes ``image-1``.

    Args:
        image: ImageRecord, or any object/mapping with an optional ``format``
        position_index: Zero-based position of the image

    Returns:
        Filename such as 'image-1.png'

    Example:
        filename_for({"format": "image/jpeg"}, 5)  # 'image-6.jpeg'
    """
    return f"image-{position_index + 1}.{extension_for(_format_of(image))}"
