"""
Saving extracted images and archives to disk.

The local counterpart of a browser download: given a blob (or a single image
record) and a filename, write it under a target directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from svgpack.extract.base import ImageRecord, decode_payload
from svgpack.package.archive import ArchiveBlob
from svgpack.package.filenames import filename_for

logger = logging.getLogger(__name__)


def image_bytes(image: ImageRecord) -> bytes:
    """
    Decode one image's payload.

    Raises:
        ValueError: If the payload is not valid base64
    """
    return decode_payload(image.data_url)


def save_blob(blob: ArchiveBlob | bytes, filename: str, directory: str | Path = ".") -> Path:
    """
    Write a blob to ``directory/filename``.

    Args:
        blob: ArchiveBlob or raw bytes
        filename: Target filename
        directory: Target directory (created if missing)

    Returns:
        Path of the written file
    """
    data = blob.data if isinstance(blob, ArchiveBlob) else blob

    target_dir = Path(directory)
    target_dir.mkdir(parents=True, exist_ok=True)

    path = target_dir / filename
    path.write_bytes(data)
    logger.debug("Saved %d bytes to %s", len(data), path)
    return path


def download_single_image(
    image: ImageRecord,
    directory: str | Path = ".",
    custom_filename: str | None = None,
) -> Path:
    """
    Save one extracted image.

    Args:
        image: Record to save
        directory: Target directory
        custom_filename: Filename to use instead of ``image-{index + 1}.{ext}``

    Returns:
        Path of the written file
    """
    filename = custom_filename or filename_for(image, image.index)
    return save_blob(image_bytes(image), filename, directory)
