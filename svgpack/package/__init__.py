"""Packaging of extracted images for download."""

from __future__ import annotations

from .archive import ZIP_CONTENT_TYPE, ArchiveBlob, generate_archive, has_payload
from .filenames import extension_for, filename_for

__all__ = [
    "ZIP_CONTENT_TYPE",
    "ArchiveBlob",
    "generate_archive",
    "has_payload",
    "filename_for",
    "extension_for",
]
