"""
Error taxonomy and user-facing translation.

Three tagged failure kinds cover the pipeline:

- ValidationError: input-shape problems (never retried)
- FetchError: network/HTTP problems while fetching a URL
- ParseError: SVG structural problems

translate() maps any exception to a message a user can act on.
"""

from __future__ import annotations

import logging

import httpx

from svgpack import messages

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Exceptions
# -----------------------------------------------------------------------------


class SvgpackError(Exception):
    """Base exception for svgpack operations."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SvgpackError):
    """Raised when input fails format or size rules."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class FetchError(SvgpackError):
    """Raised when fetching SVG content from a URL fails."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class ParseError(SvgpackError):
    """Raised when SVG markup cannot be parsed."""

    pass


class ArchiveError(SvgpackError):
    """Raised when a ZIP archive cannot be assembled."""

    pass


# -----------------------------------------------------------------------------
# Translation
# -----------------------------------------------------------------------------

# Low-level failures that surface when a request never reached the server
_NETWORK_PRIMITIVES = (TypeError, ConnectionError, httpx.TransportError)


def _message_of(error: BaseException) -> str:
    if isinstance(error, SvgpackError):
        return error.message
    return str(error)


def translate(error: BaseException) -> str:
    """
    Convert an exception into a user-friendly message.

    The full error is logged before translation, whatever its kind.

    Args:
        error: Any exception raised by the pipeline or its collaborators

    Returns:
        Message suitable for showing to a user
    """
    logger.error("Error occurred: %r", error, exc_info=error)

    message = _message_of(error)

    if isinstance(error, ValidationError):
        return message

    if isinstance(error, FetchError):
        if "CORS" in message or "cors" in message:
            return messages.CORS_ERROR
        if "timeout" in message or "Timeout" in message:
            return messages.TIMEOUT_ERROR
        return message or messages.FETCH_FAILED

    if isinstance(error, ParseError):
        return messages.PARSE_ERROR

    if isinstance(error, _NETWORK_PRIMITIVES) and "fetch" in message:
        return messages.NETWORK_ERROR

    return message or messages.UNEXPECTED_ERROR
