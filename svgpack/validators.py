"""
Input validation.

Checks raw input (URL strings, file handles, SVG text) against format and
size rules before anything is parsed or fetched. Validators never raise:
URL checks return a bool, the others return a ValidationResult.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from svgpack import messages


# 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024

SVG_CONTENT_TYPES: frozenset[str] = frozenset(
    {
        "image/svg+xml",
        "text/xml",
        "application/xml",
    }
)

# Characters that can never appear in a URL host
FORBIDDEN_HOST_CHARACTERS: frozenset[str] = frozenset(" \t\n\r#/<>?@[\\]^|%")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation check. ``error`` is set iff ``valid`` is False."""

    valid: bool
    error: str | None = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True, error=None)

    @classmethod
    def fail(cls, error: str) -> "ValidationResult":
        return cls(valid=False, error=error)


def validate_url(url: Any) -> bool:
    """
    Check that a string is an absolute http(s) URL.

    Args:
        url: Candidate URL

    Returns:
        True if the URL parses with an http or https scheme and a well-formed host
    """
    if not isinstance(url, str):
        return False
    try:
        parsed = urlparse(url.strip())
        # Accessing .port validates the netloc
        parsed.port
    except ValueError:
        return False
    host = parsed.hostname
    if parsed.scheme not in ("http", "https") or not host:
        return False
    return not any(char in FORBIDDEN_HOST_CHARACTERS for char in host)


def validate_svg_content(text: Any) -> ValidationResult:
    """
    Heuristic check that text looks like SVG markup.

    This is a syntactic check only: non-empty and containing ``<svg``.
    """
    if not text or not isinstance(text, str) or not text.strip():
        return ValidationResult.fail(messages.EMPTY_CONTENT)

    if "<svg" not in text:
        return ValidationResult.fail(messages.INVALID_SVG)

    return ValidationResult.ok()


def validate_file(file: Any, *, max_size: int = MAX_FILE_SIZE) -> ValidationResult:
    """
    Check a file handle's size and type.

    The handle needs ``size`` (bytes), ``type`` (declared content type) and
    ``name``. A ``.svg`` filename is accepted even when the content type is
    empty or wrong.

    Args:
        file: File handle, or None
        max_size: Maximum size in bytes

    Returns:
        ValidationResult
    """
    if file is None:
        return ValidationResult.fail(messages.NO_FILE)

    if (getattr(file, "size", 0) or 0) > max_size:
        return ValidationResult.fail(messages.FILE_TOO_LARGE)

    content_type = getattr(file, "type", "") or ""
    name = getattr(file, "name", "") or ""
    if content_type not in SVG_CONTENT_TYPES and not name.endswith(".svg"):
        return ValidationResult.fail(messages.INVALID_FILE_TYPE)

    return ValidationResult.ok()
