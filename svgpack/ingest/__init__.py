"""
Svgpack ingest layer.

Acquires SVG markup from files, URLs, and pasted text.

Usage:
    from svgpack.ingest import detect_source

    source = detect_source("drawing.svg")
    svg_text = source.read(lambda percent: print(f"{percent}%"))
"""

from .files import FileHandle, read_svg_file
from .sources import FileSource, SvgSource, TextSource, URLSource, detect_source
from .url import fetch_svg_from_url, fetch_svg_from_url_sync

__all__ = [
    # Files
    "FileHandle",
    "read_svg_file",
    # URLs
    "fetch_svg_from_url",
    "fetch_svg_from_url_sync",
    # Sources
    "SvgSource",
    "FileSource",
    "URLSource",
    "TextSource",
    "detect_source",
]
