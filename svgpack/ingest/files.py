"""
File source for SVG input.

Wraps local files and uploaded bytes in a FileHandle carrying the name, size
and declared content type that validation needs, and reads the content as
text with optional progress reporting.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable

from svgpack import messages
from svgpack.errors import SvgpackError, ValidationError
from svgpack.validators import MAX_FILE_SIZE, validate_file


# Read in 64KB chunks so progress is reported on large files
READ_CHUNK_SIZE = 64 * 1024

ProgressCallback = Callable[[int], None]


@dataclass(frozen=True, slots=True)
class FileHandle:
    """
    A file-like handle for SVG input.

    Attributes:
        name: Filename (no directory)
        size: Size in bytes
        type: Declared content type, '' when unknown
        _opener: Returns a fresh binary stream over the content
    """

    name: str
    size: int
    type: str
    _opener: Callable[[], BinaryIO]

    @classmethod
    def from_path(cls, path: str | Path) -> "FileHandle":
        """
        Create a handle for a local file.

        Raises:
            FileNotFoundError: If the path is not a file
        """
        p = Path(path)
        if not p.is_file():
            raise FileNotFoundError(f"File not found: {p}")

        content_type, _ = mimetypes.guess_type(p.name)
        return cls(
            name=p.name,
            size=p.stat().st_size,
            type=content_type or "",
            _opener=lambda: open(p, "rb"),
        )

    @classmethod
    def from_bytes(cls, name: str, data: bytes, content_type: str | None = None) -> "FileHandle":
        """Create a handle over in-memory content (uploads, stdin)."""
        return cls(
            name=name,
            size=len(data),
            type=content_type or "",
            _opener=lambda: BytesIO(data),
        )

    def open(self) -> BinaryIO:
        return self._opener()


def read_svg_file(
    file: FileHandle | None,
    on_progress: ProgressCallback | None = None,
    *,
    max_size: int = MAX_FILE_SIZE,
) -> str:
    """
    Validate and read an SVG file as text.

    Args:
        file: Handle to read
        on_progress: Called with 0-100 after each chunk when the size is known
        max_size: Maximum accepted size in bytes

    Returns:
        File content decoded as UTF-8 (a leading BOM is dropped)

    Raises:
        ValidationError: If the file is missing, too large, or not SVG
        SvgpackError: If reading or decoding fails
    """
    validation = validate_file(file, max_size=max_size)
    if file is None or not validation.valid:
        raise ValidationError(validation.error or messages.NO_FILE, field="file")

    chunks: list[bytes] = []
    loaded = 0
    try:
        with file.open() as stream:
            while chunk := stream.read(READ_CHUNK_SIZE):
                chunks.append(chunk)
                loaded += len(chunk)
                if on_progress is not None and file.size:
                    on_progress(min(100, round(loaded / file.size * 100)))
        return b"".join(chunks).decode("utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise SvgpackError(f"Failed to read file: {e}") from e
