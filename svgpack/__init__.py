"""
Svgpack: pull base64-embedded raster images out of SVG files.

Usage:
    from svgpack import extract_images, generate_archive

    images = extract_images(svg_text)
    blob = generate_archive(images)
"""

from __future__ import annotations

__version__ = "0.1.0"

from svgpack import messages
from svgpack.errors import (
    ArchiveError,
    FetchError,
    ParseError,
    SvgpackError,
    ValidationError,
    translate,
)
from svgpack.extract import ImageRecord, count_images, extract_images, inspect_images
from svgpack.package import ArchiveBlob, filename_for, generate_archive
from svgpack.validators import (
    ValidationResult,
    validate_file,
    validate_svg_content,
    validate_url,
)

__all__ = [
    "__version__",
    "messages",
    # Errors
    "SvgpackError",
    "ValidationError",
    "FetchError",
    "ParseError",
    "ArchiveError",
    "translate",
    # Validation
    "ValidationResult",
    "validate_url",
    "validate_svg_content",
    "validate_file",
    # Extraction
    "ImageRecord",
    "extract_images",
    "inspect_images",
    "count_images",
    # Packaging
    "ArchiveBlob",
    "filename_for",
    "generate_archive",
]
