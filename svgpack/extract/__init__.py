"""Embedded image extraction from SVG documents."""

from __future__ import annotations

from .base import DATA_IMAGE_PREFIX, ImageRecord, decode_payload, estimate_size, payload_of
from .svg import (
    ExtractionReport,
    SkippedImage,
    count_images,
    extract_images,
    inspect_images,
    parse_svg,
)

__all__ = [
    "DATA_IMAGE_PREFIX",
    "ImageRecord",
    "ExtractionReport",
    "SkippedImage",
    "decode_payload",
    "estimate_size",
    "payload_of",
    "parse_svg",
    "extract_images",
    "inspect_images",
    "count_images",
]
