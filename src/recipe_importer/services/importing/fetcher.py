"""Bounded HTML fetching for recipe pages."""

from __future__ import annotations

import asyncio
from urllib.parse import urlsplit

import httpx

from recipe_importer.core.config import get_settings
from recipe_importer.observability.logging import get_logger
from recipe_importer.services.importing.exceptions import (
    FetchTimeoutError,
    InvalidUrlError,
    RecipeFetchError,
    ResponseTooLargeError,
    UnsupportedProtocolError,
    UpstreamResponseError,
)


logger = get_logger(__name__)

ALLOWED_SCHEMES = frozenset({"http", "https"})


def validate_url(url: str) -> str:
    """Check that a URL is absolute and uses http(s).

    Args:
        url: Candidate URL.

    Returns:
        The stripped URL.

    Raises:
        InvalidUrlError: If the URL has no scheme or host.
        UnsupportedProtocolError: If the scheme is not http or https.
    """
    candidate = url.strip() if isinstance(url, str) else ""
    try:
        parts = urlsplit(candidate)
    except ValueError as e:
        error_msg = f"Invalid URL: {url!r}"
        raise InvalidUrlError(error_msg) from e

    if not parts.scheme:
        error_msg = f"Invalid URL: {url!r}"
        raise InvalidUrlError(error_msg)
    if parts.scheme.lower() not in ALLOWED_SCHEMES:
        raise UnsupportedProtocolError(parts.scheme)
    if not parts.hostname:
        error_msg = f"Invalid URL: {url!r}"
        raise InvalidUrlError(error_msg)
    return candidate


class HtmlFetcher:
    """Fetches recipe pages with a wall-clock timeout and a size cap.

    Example:
        ```python
        fetcher = HtmlFetcher()
        await fetcher.initialize()
        html = await fetcher.fetch("https://example.com/recipe")
        await fetcher.shutdown()
        ```
    """

    def __init__(
        self,
        *,
        timeout: float | None = None,
        max_bytes: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings().importing
        self._timeout = timeout if timeout is not None else settings.fetch_timeout
        self._max_bytes = max_bytes if max_bytes is not None else settings.max_response_bytes
        self._headers = {
            "User-Agent": settings.user_agent,
            "Accept": (
                "text/html,application/xhtml+xml,application/xml;"
                "q=0.9,image/webp,*/*;q=0.8"
            ),
            "Accept-Language": settings.accept_language,
        }
        self._transport = transport
        self._http_client: httpx.AsyncClient | None = None

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    async def initialize(self) -> None:
        """Create the pooled HTTP client."""
        self._http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(self._timeout),
            follow_redirects=True,
            headers=self._headers,
            transport=self._transport,
        )
        logger.info(
            "HtmlFetcher initialized",
            timeout=self._timeout,
            max_bytes=self._max_bytes,
        )

    async def shutdown(self) -> None:
        """Release resources."""
        if self._http_client:
            await self._http_client.aclose()
            self._http_client = None
        logger.debug("HtmlFetcher shutdown")

    async def fetch(self, url: str) -> str:
        """Fetch the HTML of a page.

        Args:
            url: Page URL. Validated before any network activity.

        Returns:
            Decoded response body.

        Raises:
            InvalidUrlError: If the URL is malformed.
            UnsupportedProtocolError: If the scheme is not http(s).
            FetchTimeoutError: If the whole request exceeds the timeout.
            ResponseTooLargeError: If the body exceeds the size limit.
            UpstreamResponseError: If the site answers with a non-2xx status.
            RecipeFetchError: For any other transport failure.
        """
        url = validate_url(url)
        if not self._http_client:
            msg = "Fetcher not initialized. Call initialize() first."
            raise RuntimeError(msg)

        try:
            async with asyncio.timeout(self._timeout):
                return await self._fetch_bounded(url)

        except TimeoutError as e:
            logger.warning("Fetch timed out", url=url, timeout=self._timeout)
            error_msg = f"Timed out after {self._timeout:g}s fetching {url}"
            raise FetchTimeoutError(error_msg) from e

        except httpx.TimeoutException as e:
            logger.warning("Fetch timed out", url=url, error=str(e))
            error_msg = f"Timed out fetching {url}"
            raise FetchTimeoutError(error_msg) from e

        except httpx.HTTPError as e:
            logger.warning("Request error fetching URL", url=url, error=str(e))
            error_msg = f"Failed to fetch {url}: {e}"
            raise RecipeFetchError(error_msg) from e

    async def _fetch_bounded(self, url: str) -> str:
        assert self._http_client is not None
        async with self._http_client.stream("GET", url) as response:
            if not response.is_success:
                logger.warning(
                    "HTTP error fetching URL",
                    url=url,
                    status_code=response.status_code,
                )
                raise UpstreamResponseError(response.status_code)

            declared = response.headers.get("content-length")
            if declared and declared.isdigit() and int(declared) > self._max_bytes:
                logger.warning(
                    "Declared response size over limit",
                    url=url,
                    content_length=int(declared),
                    limit=self._max_bytes,
                )
                raise ResponseTooLargeError(self._max_bytes)

            body = bytearray()
            async for chunk in response.aiter_bytes():
                body.extend(chunk)
                if len(body) > self._max_bytes:
                    logger.warning("Response body over limit", url=url, limit=self._max_bytes)
                    raise ResponseTooLargeError(self._max_bytes)

            logger.debug("Fetched page", url=url, size=len(body))
            return body.decode(response.encoding or "utf-8", errors="replace")
