"""
SVG input sources.

Provides uniform access to SVG markup from:
- Local files (validated for size and type)
- URLs (fetched with timeout and retries)
- Pasted text (stdin)

All sources implement the SvgSource protocol.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Protocol, TextIO, runtime_checkable

from svgpack.runtime import RuntimeConfig, get_global_config

from .files import FileHandle, read_svg_file
from .url import fetch_svg_from_url_sync


@runtime_checkable
class SvgSource(Protocol):
    """A place SVG markup can be read from."""

    label: str

    def read(self, on_progress: Callable[[int], None] | None = None) -> str:
        """Return the SVG markup."""
        ...


class FileSource:
    """SVG markup from a local file."""

    def __init__(self, path: str | Path, *, config: RuntimeConfig | None = None) -> None:
        self.handle = FileHandle.from_path(path)
        self.label = str(path)
        self.config = config or get_global_config()

    def read(self, on_progress: Callable[[int], None] | None = None) -> str:
        return read_svg_file(self.handle, on_progress, max_size=self.config.max_file_size)


class URLSource:
    """SVG markup fetched from an http(s) URL."""

    def __init__(self, url: str, *, config: RuntimeConfig | None = None) -> None:
        self.url = url
        self.label = url
        self.config = config or get_global_config()

    def read(self, on_progress: Callable[[int], None] | None = None) -> str:
        content = fetch_svg_from_url_sync(
            self.url,
            timeout_ms=self.config.fetch_timeout_ms,
            retries=self.config.fetch_retries,
            backoff_ms=self.config.retry_backoff_ms,
        )
        if on_progress is not None:
            on_progress(100)
        return content


class TextSource:
    """SVG markup pasted as text (read from a stream, stdin by default)."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self.stream = stream
        self.label = "<stdin>"

    def read(self, on_progress: Callable[[int], None] | None = None) -> str:
        content = (self.stream or sys.stdin).read()
        if on_progress is not None:
            on_progress(100)
        return content


def detect_source(target: str, *, config: RuntimeConfig | None = None) -> SvgSource:
    """
    Detect and create the appropriate source for a target.

    Handles:
    - ``-`` (SVG text on stdin)
    - URLs (http://, https://)
    - Local files

    Args:
        target: Path, URL, or '-'
        config: Runtime configuration (default: global config)

    Returns:
        SvgSource implementation

    Raises:
        FileNotFoundError: If a local path doesn't exist
        ValueError: If the target is a directory
    """
    if target == "-":
        return TextSource()

    if target.startswith(("http://", "https://")):
        return URLSource(target, config=config)

    path = Path(target)
    if path.is_dir():
        raise ValueError(f"Expected an SVG file, got a directory: {target}")
    if not path.exists():
        raise FileNotFoundError(f"Path not found: {target}")

    return FileSource(path, config=config)
