"""Webpage fetching for URL imports.

Bounded GET: one identifiable User-Agent, a hard deadline that cancels the
in-flight request, and a size cap checked both against Content-Length and
against the bytes actually received.
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from urllib.parse import urlparse

import httpx

from cuisinons.config import settings
from cuisinons.recipe_import.errors import (
    ContentTooLargeError,
    FetchError,
    ImportErrorType,
    WebsiteBlockedError,
)

logger = logging.getLogger(__name__)

# Descriptive so site operators can identify (and block) the bot
USER_AGENT = "CuisinonsBot/1.0 (Personal Recipe Manager; +https://cuisinons.app/bot)"

REQUEST_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "DNT": "1",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

BLOCKED_STATUS_CODES = (403, 429)


@dataclass
class FetchedPage:
    """A fetched page. `url` is the final URL after redirects."""

    html: str
    url: str
    status_code: int = 200


def validate_url(url: str) -> str | None:
    """
    Validate URL format.

    Returns error message if invalid, None if valid.
    """
    if not url or not url.strip():
        return "URL is required"

    url = url.strip()

    if not re.match(r"^https?://", url, re.IGNORECASE):
        return "URL must start with http:// or https://"

    try:
        parsed = urlparse(url)
    except ValueError:
        return "Invalid URL format"

    if not parsed.netloc:
        return "Invalid URL format"

    return None


async def fetch_webpage_content(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
    timeout: float | None = None,
    max_content_length: int | None = None,
) -> FetchedPage:
    """
    Fetch a recipe page.

    Args:
        url: Page to fetch (http or https)
        client: Shared client; a short-lived one is created if None
        timeout: Seconds before the request is cancelled
        max_content_length: Size cap in bytes

    Raises:
        WebsiteBlockedError: HTTP 403/429
        ContentTooLargeError: declared or actual body above the cap
        FetchError: invalid URL, other non-2xx responses, network errors, timeout
    """
    error = validate_url(url)
    if error:
        raise FetchError(error, ImportErrorType.VALIDATION_FAILED)

    timeout = timeout if timeout is not None else settings.import_timeout_seconds
    cap = max_content_length if max_content_length is not None else settings.max_content_length

    try:
        return await asyncio.wait_for(_fetch(url.strip(), client, timeout, cap), timeout)
    except asyncio.TimeoutError as e:
        raise FetchError(
            f"Request timed out after {timeout:g} seconds", ImportErrorType.TIMEOUT_ERROR
        ) from e
    except httpx.TimeoutException as e:
        raise FetchError(
            f"Request timed out after {timeout:g} seconds", ImportErrorType.TIMEOUT_ERROR
        ) from e
    except httpx.HTTPError as e:
        raise FetchError(f"Failed to fetch page: {e}") from e


async def _fetch(
    url: str, client: httpx.AsyncClient | None, timeout: float, cap: int
) -> FetchedPage:
    if client is not None:
        return await _stream_page(client, url, cap)

    async with httpx.AsyncClient(follow_redirects=True, timeout=timeout) as owned:
        return await _stream_page(owned, url, cap)


async def _stream_page(client: httpx.AsyncClient, url: str, cap: int) -> FetchedPage:
    async with client.stream(
        "GET", url, headers=REQUEST_HEADERS, follow_redirects=True
    ) as response:
        status = response.status_code
        if status in BLOCKED_STATUS_CODES:
            logger.info(f"{url} refused automated access (HTTP {status})")
            raise WebsiteBlockedError(status_code=status)

        if not response.is_success:
            raise FetchError(f"HTTP {status}: {response.reason_phrase}", status_code=status)

        declared = response.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > cap:
            raise ContentTooLargeError()

        # Declared length can lie or be absent
        received = 0
        chunks: list[bytes] = []
        async for chunk in response.aiter_bytes():
            received += len(chunk)
            if received > cap:
                raise ContentTooLargeError()
            chunks.append(chunk)

        encoding = response.charset_encoding or "utf-8"
        try:
            html = b"".join(chunks).decode(encoding, errors="replace")
        except LookupError:
            html = b"".join(chunks).decode("utf-8", errors="replace")

        logger.debug(f"Fetched {received} bytes from {response.url}")
        return FetchedPage(html=html, url=str(response.url), status_code=status)
