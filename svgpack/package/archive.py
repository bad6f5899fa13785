"""
ZIP archive packaging for extracted images.

Bundles image records into a single in-memory ZIP archive, one deflated
entry per image, named by the filename policy.
"""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from svgpack import messages
from svgpack.errors import ArchiveError
from svgpack.extract.base import decode_payload, payload_of
from svgpack.runtime import DEFAULT_COMPRESSION_LEVEL

from .filenames import filename_for

logger = logging.getLogger(__name__)

ZIP_CONTENT_TYPE = "application/zip"

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True)
class ArchiveBlob:
    """A finished archive and its declared content type."""

    data: bytes
    content_type: str = ZIP_CONTENT_TYPE

    @property
    def size(self) -> int:
        return len(self.data)


def _data_url_of(image: Any) -> str | None:
    if isinstance(image, Mapping):
        return image.get("data_url")
    return getattr(image, "data_url", None)


def has_payload(image: Any) -> bool:
    """Check that an image's data URL carries a non-empty payload."""
    return bool(payload_of(_data_url_of(image)))


def generate_archive(
    images: Iterable[Any] | None,
    on_progress: ProgressCallback | None = None,
    *,
    compression_level: int = DEFAULT_COMPRESSION_LEVEL,
) -> ArchiveBlob:
    """
    Build a ZIP archive from image records.

    Records without a payload are logged and dropped. The remaining records
    are renumbered 0..n-1 for naming, so filenames stay contiguous.

    Args:
        images: ImageRecords (or mappings with ``data_url``/``format``)
        on_progress: Called with integer percentages; the last call is 100
        compression_level: Deflate level (default: 6)

    Returns:
        ArchiveBlob with the ZIP bytes

    Raises:
        ArchiveError: If there is nothing to package or assembly fails

    Example:
        blob = generate_archive(extract_images(svg), lambda p: print(f"{p}%"))
    """
    records = list(images) if images is not None else []
    if not records:
        raise ArchiveError(messages.NO_IMAGES_PROVIDED)

    valid: list[Any] = []
    for index, image in enumerate(records):
        if not has_payload(image):
            logger.warning("Image at index %d has no valid base64 data, skipping", index)
            continue
        valid.append(image)

    if not valid:
        raise ArchiveError(messages.NO_VALID_IMAGES)

    total = len(valid)
    buffer = io.BytesIO()

    try:
        with zipfile.ZipFile(
            buffer,
            "w",
            compression=zipfile.ZIP_DEFLATED,
            compresslevel=compression_level,
        ) as zf:
            for position, image in enumerate(valid):
                filename = filename_for(image, position)
                zf.writestr(filename, decode_payload(_data_url_of(image)))
                logger.debug("Added %s to archive", filename)

                if on_progress is not None:
                    on_progress(round((position + 1) * 100 / total))
    except Exception as e:
        logger.error("ZIP generation failed: %s", e, exc_info=e)
        raise ArchiveError(messages.ZIP_GENERATION_FAILED) from e

    return ArchiveBlob(data=buffer.getvalue())
