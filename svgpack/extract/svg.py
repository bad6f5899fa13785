"""
Embedded image extraction from SVG markup.

Parses SVG text into an element tree, walks it in document order, and
collects every ``<image>`` element whose reference attribute is a base64
``data:image/...`` URL. External references are ignored entirely.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator
from xml.etree import ElementTree as ET

from svgpack import messages
from svgpack.errors import ParseError, ValidationError
from svgpack.validators import validate_svg_content

from .base import DATA_IMAGE_PREFIX, ImageRecord

logger = logging.getLogger(__name__)

XLINK_NS = "http://www.w3.org/1999/xlink"

# Reference attributes in lookup order: SVG 2 href, then legacy xlink:href
HREF_ATTRIBUTES: tuple[str, ...] = ("href", f"{{{XLINK_NS}}}href")


@dataclass(frozen=True)
class SkippedImage:
    """An ``<image>`` element that did not produce a record."""

    position: int  # position among all <image> elements
    reason: str


@dataclass
class ExtractionReport:
    """Records built from a document plus the elements that were skipped."""

    images: list[ImageRecord]
    skipped: list[SkippedImage]


def local_name(tag: object) -> str:
    """Strip any ``{namespace}`` prefix from an element tag."""
    if not isinstance(tag, str):
        # Comments and processing instructions
        return ""
    return tag.rsplit("}", 1)[-1]


def image_reference(element: ET.Element) -> str | None:
    """Return the first non-empty reference attribute of an element."""
    for name in HREF_ATTRIBUTES:
        value = element.get(name)
        if value:
            return value
    return None


def parse_svg(svg_text: str) -> ET.Element:
    """
    Parse SVG markup into an element tree.

    Raises:
        ValidationError: If the text does not look like SVG
        ParseError: If the markup is not well-formed
    """
    validation = validate_svg_content(svg_text)
    if not validation.valid:
        raise ValidationError(validation.error or messages.INVALID_SVG, field="svg")

    try:
        return ET.fromstring(svg_text)
    except ET.ParseError as e:
        logger.debug("SVG parse failed: %s", e)
        raise ParseError(messages.MALFORMED_SVG) from e


def iter_image_elements(root: ET.Element) -> Iterator[ET.Element]:
    """Yield ``image`` elements in document (pre-order) order, any namespace."""
    for element in root.iter():
        if local_name(element.tag) == "image":
            yield element


def inspect_images(svg_text: str) -> ExtractionReport:
    """
    Extract embedded images and report which elements were skipped and why.

    Args:
        svg_text: Raw SVG markup

    Returns:
        ExtractionReport with records in document order

    Raises:
        ValidationError: If the text does not look like SVG
        ParseError: If the markup is not well-formed
    """
    root = parse_svg(svg_text)

    # Unique within this call: the index part never repeats
    stamp = int(time.time() * 1000)
    images: list[ImageRecord] = []
    skipped: list[SkippedImage] = []

    for position, element in enumerate(iter_image_elements(root)):
        href = image_reference(element)
        if href is None:
            skipped.append(SkippedImage(position, "no reference attribute"))
            continue
        if not href.startswith(DATA_IMAGE_PREFIX):
            skipped.append(SkippedImage(position, "external reference"))
            continue

        index = len(images)
        try:
            record = ImageRecord.from_data_url(href, index=index, id=f"img-{stamp}-{index}")
        except (ValueError, TypeError) as e:
            logger.warning("Failed to process image at position %d: %s", position, e)
            skipped.append(SkippedImage(position, str(e)))
            continue

        images.append(record)

    return ExtractionReport(images=images, skipped=skipped)


def extract_images(svg_text: str) -> list[ImageRecord]:
    """
    Extract all base64-embedded images from SVG markup.

    Both ``href`` and ``xlink:href`` are honoured. Elements with external
    references are skipped silently; malformed data URLs are logged and
    skipped.

    Args:
        svg_text: Raw SVG markup

    Returns:
        Fresh list of ImageRecords, possibly empty

    Raises:
        ValidationError: If the text is empty or lacks ``<svg``
        ParseError: If the markup is not well-formed

    Example:
        svg = '<svg xmlns="http://www.w3.org/2000/svg"><image href="data:image/png;base64,iVBO"/></svg>'
        images = extract_images(svg)
        images[0].format  # 'image/png'
    """
    return inspect_images(svg_text).images


def count_images(svg_text: str) -> int:
    """Count embedded images, returning 0 on any validation or parse failure."""
    try:
        return len(extract_images(svg_text))
    except (ValidationError, ParseError):
        return 0
