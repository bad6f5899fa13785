"""
URL source for SVG input.

Fetches SVG markup over HTTP(S) with httpx, with:
- a whole-request timeout (default 30s)
- retries with exponential back-off (base 1s, doubling per attempt)
- validation that the response looks like SVG
"""

from __future__ import annotations

import asyncio
import logging

import httpx

from svgpack import messages
from svgpack.errors import FetchError, ValidationError
from svgpack.runtime import DEFAULT_FETCH_TIMEOUT_MS, DEFAULT_RETRY_BACKOFF_MS
from svgpack.validators import validate_url

logger = logging.getLogger(__name__)

REQUEST_HEADERS = {
    "Accept": "image/svg+xml,application/xml;q=0.9,text/xml;q=0.9,*/*;q=0.8",
    "User-Agent": "svgpack",
}


def is_retryable(error: Exception) -> bool:
    """Validation failures and CORS rejections are never retried."""
    if isinstance(error, ValidationError):
        return False
    return "CORS" not in str(error)


async def _fetch_once(client: httpx.AsyncClient, url: str) -> str:
    response = await client.get(url, headers=REQUEST_HEADERS)

    if not response.is_success:
        raise FetchError(
            f"HTTP {response.status_code}: {response.reason_phrase}",
            url,
            response.status_code,
        )

    content = response.text
    if "<svg" not in content:
        raise FetchError(messages.NOT_SVG_RESPONSE, url, response.status_code)

    return content


async def _attempt(client: httpx.AsyncClient, url: str, timeout_ms: int) -> str:
    """One fetch attempt, with transport failures mapped to FetchError."""
    try:
        return await asyncio.wait_for(_fetch_once(client, url), timeout=timeout_ms / 1000)
    except (asyncio.TimeoutError, httpx.TimeoutException) as e:
        raise FetchError(messages.TIMEOUT_ERROR, url) from e
    except httpx.RequestError as e:
        logger.debug("Request error fetching %s: %s", url, e)
        raise FetchError(messages.NETWORK_ERROR, url) from e


async def fetch_svg_from_url(
    url: str,
    *,
    timeout_ms: int = DEFAULT_FETCH_TIMEOUT_MS,
    retries: int = 0,
    backoff_ms: int = DEFAULT_RETRY_BACKOFF_MS,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Fetch SVG markup from a URL.

    Args:
        url: http(s) URL to fetch
        timeout_ms: Abort each attempt after this many milliseconds
        retries: Extra attempts after the first failure
        backoff_ms: Delay before the first retry; doubles per attempt
        client: Optional shared AsyncClient (a private one is used otherwise)

    Returns:
        SVG content as text

    Raises:
        ValidationError: If the URL is not a valid http(s) URL
        FetchError: For HTTP, network, timeout, or non-SVG responses

    Example:
        svg = await fetch_svg_from_url("https://example.com/logo.svg", retries=2)
    """
    if not validate_url(url):
        raise ValidationError(messages.INVALID_URL, field="url")

    if client is None:
        async with httpx.AsyncClient(follow_redirects=True) as own_client:
            return await _fetch_with_retries(own_client, url, timeout_ms, retries, backoff_ms)
    return await _fetch_with_retries(client, url, timeout_ms, retries, backoff_ms)


async def _fetch_with_retries(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int,
    retries: int,
    backoff_ms: int,
) -> str:
    attempts = max(0, retries) + 1

    for attempt in range(attempts):
        try:
            logger.debug("Fetching %s (attempt %d/%d)", url, attempt + 1, attempts)
            return await _attempt(client, url, timeout_ms)
        except FetchError as e:
            if attempt + 1 == attempts or not is_retryable(e):
                raise

            delay_ms = backoff_ms * 2**attempt
            logger.debug("Fetch failed (%s), retrying in %dms", e, delay_ms)
            await asyncio.sleep(delay_ms / 1000)

    raise FetchError(messages.FETCH_FAILED, url)


def fetch_svg_from_url_sync(url: str, **kwargs) -> str:
    """Blocking wrapper around fetch_svg_from_url for synchronous callers."""
    return asyncio.run(fetch_svg_from_url(url, **kwargs))
