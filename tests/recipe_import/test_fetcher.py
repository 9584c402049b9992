"""Tests for the webpage fetcher, against httpx.MockTransport."""

import asyncio

import httpx
import pytest

from cuisinons.recipe_import.errors import (
    ContentTooLargeError,
    FetchError,
    ImportErrorType,
    WebsiteBlockedError,
)
from cuisinons.recipe_import.fetcher import USER_AGENT, fetch_webpage_content, validate_url

URL = "https://example.com/recipe"
PAGE = "<html><body><h1>Soup</h1></body></html>"


def _fetch(handler, url=URL, **kwargs):
    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await fetch_webpage_content(url, client=client, **kwargs)

    kwargs.setdefault("timeout", 5)
    kwargs.setdefault("max_content_length", 1024 * 1024)
    return asyncio.run(run())


class TestValidateUrl:
    def test_valid(self):
        assert validate_url("https://example.com/a") is None
        assert validate_url("HTTP://example.com") is None

    def test_invalid(self):
        assert validate_url("") == "URL is required"
        assert validate_url("ftp://example.com") == "URL must start with http:// or https://"
        assert validate_url("example.com/recipe") == "URL must start with http:// or https://"
        assert validate_url("https://") == "Invalid URL format"


class TestFetch:
    """Tests for successful fetches."""

    def test_returns_html_and_sends_user_agent(self):
        seen = {}

        def handler(request):
            seen["user-agent"] = request.headers["user-agent"]
            return httpx.Response(200, text=PAGE)

        page = _fetch(handler)

        assert page.html == PAGE
        assert page.url == URL
        assert page.status_code == 200
        assert seen["user-agent"] == USER_AGENT

    def test_follows_redirects(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(301, headers={"Location": URL})
            return httpx.Response(200, text=PAGE)

        page = _fetch(handler, url="https://example.com/old")

        assert page.url == URL
        assert page.html == PAGE

    def test_decodes_declared_charset(self):
        def handler(request):
            return httpx.Response(
                200,
                content="<h1>Crème brûlée</h1>".encode("iso-8859-1"),
                headers={"Content-Type": "text/html; charset=iso-8859-1"},
            )

        assert _fetch(handler).html == "<h1>Crème brûlée</h1>"


class TestFetchErrors:
    """Tests for refused, failed and oversized fetches."""

    @pytest.mark.parametrize("status", [403, 429])
    def test_blocked(self, status):
        with pytest.raises(WebsiteBlockedError) as exc_info:
            _fetch(lambda request: httpx.Response(status))
        assert str(exc_info.value) == "Website blocks automated access"
        assert exc_info.value.status_code == status

    def test_http_error_status(self):
        with pytest.raises(FetchError) as exc_info:
            _fetch(lambda request: httpx.Response(404))
        assert str(exc_info.value) == "HTTP 404: Not Found"
        assert exc_info.value.status_code == 404

    def test_declared_length_over_cap(self):
        def handler(request):
            return httpx.Response(200, content=b"x" * 2048)

        with pytest.raises(ContentTooLargeError):
            _fetch(handler, max_content_length=1024)

    def test_streamed_body_over_cap(self):
        async def chunks():
            for _ in range(4):
                yield b"x" * 512

        def handler(request):
            # No Content-Length: chunked transfer
            return httpx.Response(200, content=chunks())

        with pytest.raises(ContentTooLargeError) as exc_info:
            _fetch(handler, max_content_length=1024)
        assert str(exc_info.value) == "Content too large to process"

    def test_invalid_url_makes_no_request(self):
        def handler(request):
            raise AssertionError("should not be called")

        with pytest.raises(FetchError) as exc_info:
            _fetch(handler, url="not a url")
        assert exc_info.value.error_type == ImportErrorType.VALIDATION_FAILED

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(FetchError) as exc_info:
            _fetch(handler)
        assert str(exc_info.value) == "Failed to fetch page: connection refused"
        assert exc_info.value.error_type == ImportErrorType.NETWORK_ERROR

    def test_transport_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("read timed out", request=request)

        with pytest.raises(FetchError) as exc_info:
            _fetch(handler, timeout=5)
        assert exc_info.value.error_type == ImportErrorType.TIMEOUT_ERROR
        assert str(exc_info.value) == "Request timed out after 5 seconds"

    def test_deadline_cancels_slow_response(self):
        async def handler(request):
            await asyncio.sleep(5)
            return httpx.Response(200, text=PAGE)

        with pytest.raises(FetchError) as exc_info:
            _fetch(handler, timeout=0.05)
        assert exc_info.value.error_type == ImportErrorType.TIMEOUT_ERROR
        assert str(exc_info.value) == "Request timed out after 0.05 seconds"
