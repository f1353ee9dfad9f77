"""Unit tests for HtmlFetcher.

Tests cover:
- URL validation before network activity
- Size limits (declared and streamed)
- Upstream status and transport errors
- Timeout handling
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from recipe_importer.services.importing.exceptions import (
    FetchTimeoutError,
    InvalidUrlError,
    RecipeFetchError,
    ResponseTooLargeError,
    UnsupportedProtocolError,
    UpstreamResponseError,
)
from recipe_importer.services.importing.fetcher import HtmlFetcher, validate_url


if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, AsyncIterator


pytestmark = pytest.mark.unit

RECIPE_URL = "https://recipes.example.com/pancakes"


@pytest.fixture
async def fetcher() -> AsyncGenerator[HtmlFetcher]:
    """Initialized fetcher with a 1 KB limit."""
    html_fetcher = HtmlFetcher(timeout=5.0, max_bytes=1024)
    await html_fetcher.initialize()
    yield html_fetcher
    await html_fetcher.shutdown()


class TestValidateUrl:
    """Tests for URL validation."""

    def test_accepts_http_and_https(self) -> None:
        """Should return the stripped URL."""
        assert validate_url(" https://example.com/a ") == "https://example.com/a"
        assert validate_url("http://example.com") == "http://example.com"

    @pytest.mark.parametrize("url", ["ftp://example.com/recipe", "file:///etc/passwd"])
    def test_rejects_other_schemes(self, url: str) -> None:
        """Should raise UnsupportedProtocolError for non-http schemes."""
        with pytest.raises(UnsupportedProtocolError):
            validate_url(url)

    @pytest.mark.parametrize("url", ["", "not a url", "example.com/recipe", "https://"])
    def test_rejects_malformed_urls(self, url: str) -> None:
        """Should raise InvalidUrlError when scheme or host is missing."""
        with pytest.raises(InvalidUrlError):
            validate_url(url)


class TestHtmlFetcherLifecycle:
    """Tests for initialize/shutdown."""

    async def test_fetch_before_initialize_raises(self) -> None:
        """Should refuse to fetch before initialize()."""
        fetcher = HtmlFetcher(timeout=1.0, max_bytes=1024)

        with pytest.raises(RuntimeError):
            await fetcher.fetch(RECIPE_URL)

    async def test_shutdown_is_safe_twice(self) -> None:
        """Should tolerate repeated shutdown."""
        fetcher = HtmlFetcher(timeout=1.0, max_bytes=1024)
        await fetcher.initialize()

        await fetcher.shutdown()
        await fetcher.shutdown()

    def test_defaults_come_from_settings(self) -> None:
        """Should use the configured size limit when none is given."""
        fetcher = HtmlFetcher()
        assert fetcher.max_bytes == 2 * 1024 * 1024


class TestHtmlFetcherFetch:
    """Tests for fetch()."""

    @respx.mock
    async def test_returns_html(self, fetcher: HtmlFetcher) -> None:
        """Should return the decoded page body."""
        respx.get(RECIPE_URL).mock(
            return_value=httpx.Response(
                200,
                text="<html><h1>Pão de queijo</h1></html>",
                headers={"Content-Type": "text/html; charset=utf-8"},
            )
        )

        html = await fetcher.fetch(RECIPE_URL)

        assert "Pão de queijo" in html

    @respx.mock
    async def test_sends_browser_headers(self, fetcher: HtmlFetcher) -> None:
        """Should send a browser User-Agent and Accept-Language."""
        route = respx.get(RECIPE_URL).mock(return_value=httpx.Response(200, text="ok"))

        await fetcher.fetch(RECIPE_URL)

        request = route.calls.last.request
        assert "Mozilla/5.0" in request.headers["User-Agent"]
        assert "pt-BR" in request.headers["Accept-Language"]

    @respx.mock(assert_all_called=False)
    async def test_unsupported_protocol_makes_no_request(
        self,
        fetcher: HtmlFetcher,
        respx_mock: respx.MockRouter,
    ) -> None:
        """Should reject ftp URLs before any network call."""
        route = respx_mock.route().mock(return_value=httpx.Response(200))

        with pytest.raises(UnsupportedProtocolError):
            await fetcher.fetch("ftp://x/recipe")

        assert route.call_count == 0

    @respx.mock
    async def test_declared_size_over_limit(self, fetcher: HtmlFetcher) -> None:
        """Should reject a declared Content-Length over the limit."""
        respx.get(RECIPE_URL).mock(
            return_value=httpx.Response(
                200,
                content=b"x" * 2048,
                headers={"Content-Length": str(5 * 1024 * 1024)},
            )
        )

        with pytest.raises(ResponseTooLargeError) as exc_info:
            await fetcher.fetch(RECIPE_URL)

        assert exc_info.value.limit == 1024

    @respx.mock
    async def test_streamed_size_over_limit(self, fetcher: HtmlFetcher) -> None:
        """Should abort when the streamed body passes the limit."""

        async def chunks() -> AsyncIterator[bytes]:
            for _ in range(10):
                yield b"x" * 512

        respx.get(RECIPE_URL).mock(return_value=httpx.Response(200, content=chunks()))

        with pytest.raises(ResponseTooLargeError):
            await fetcher.fetch(RECIPE_URL)

    @respx.mock
    async def test_non_success_status(self, fetcher: HtmlFetcher) -> None:
        """Should raise UpstreamResponseError carrying the status."""
        respx.get(RECIPE_URL).mock(return_value=httpx.Response(404))

        with pytest.raises(UpstreamResponseError) as exc_info:
            await fetcher.fetch(RECIPE_URL)

        assert exc_info.value.status_code == 404

    @respx.mock
    async def test_transport_timeout(self, fetcher: HtmlFetcher) -> None:
        """Should map httpx timeouts to FetchTimeoutError."""
        respx.get(RECIPE_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(FetchTimeoutError):
            await fetcher.fetch(RECIPE_URL)

    @respx.mock
    async def test_connection_error(self, fetcher: HtmlFetcher) -> None:
        """Should map connection failures to RecipeFetchError."""
        respx.get(RECIPE_URL).mock(side_effect=httpx.ConnectError("refused"))

        with pytest.raises(RecipeFetchError) as exc_info:
            await fetcher.fetch(RECIPE_URL)

        assert not isinstance(exc_info.value, FetchTimeoutError)

    @respx.mock
    async def test_wall_clock_timeout(self) -> None:
        """Should abort a slow response after the overall timeout."""

        async def slow_response(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(1)
            return httpx.Response(200, text="too late")

        respx.get(RECIPE_URL).mock(side_effect=slow_response)
        fetcher = HtmlFetcher(timeout=0.05, max_bytes=1024)
        await fetcher.initialize()

        try:
            with pytest.raises(FetchTimeoutError):
                await fetcher.fetch(RECIPE_URL)
        finally:
            await fetcher.shutdown()
