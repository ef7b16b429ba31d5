"""
Request-scoped crawl session used to fetch each configured news site once.
"""
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import httpx

from app.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


class CrawlError(Exception):
    """Base exception for crawl failures."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.message = message


class FetchError(CrawlError):
    """Transport fault or error status while fetching a page."""
    pass


class DecodeError(CrawlError):
    """Response body is not an HTML document."""
    pass


@dataclass
class CrawlerConfig:
    """Configuration for crawl session behavior."""
    # Timeout settings
    request_timeout_seconds: float = 30.0
    connect_timeout_seconds: float = 10.0

    # Concurrent requests when sites are fetched in parallel
    max_concurrent_requests: int = 5

    # User agent rotation
    user_agents: List[str] = field(default_factory=lambda: [
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:121.0) Gecko/20100101 Firefox/121.0",
        "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    ])

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "CrawlerConfig":
        settings = settings or get_settings()
        return cls(
            request_timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
            connect_timeout_seconds=settings.CONNECT_TIMEOUT_SECONDS,
        )


@dataclass
class CrawlResult:
    """Result of a single page fetch."""
    url: str
    status_code: int
    content: str
    content_type: str = ""

    @property
    def is_html(self) -> bool:
        """Whether the response declares (or omits) an HTML-ish content type."""
        if not self.content_type:
            return True
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        return media_type in ("text/html", "application/xhtml+xml", "text/xml", "application/xml")


class CrawlSession:
    """
    One fetching context per inbound request.

    Wraps a single httpx.AsyncClient; every site in the table is fetched
    through it exactly once. No retries, rate limiting or caching.
    """

    def __init__(
        self,
        config: Optional[CrawlerConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or CrawlerConfig()
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def start(self) -> None:
        """Open the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    connect=self.config.connect_timeout_seconds,
                    read=self.config.request_timeout_seconds,
                    write=self.config.request_timeout_seconds,
                    pool=self.config.request_timeout_seconds,
                ),
                follow_redirects=True,
            )
            self._owns_client = True

    async def close(self) -> None:
        """Close the client if this session created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
        self._client = None

    def _get_headers(self) -> Dict[str, str]:
        """Get request headers with a rotated user agent."""
        if self.config.user_agents:
            user_agent = random.choice(self.config.user_agents)
        else:
            user_agent = "Mozilla/5.0 (compatible; HeadlineAggregator/1.0)"
        return {
            "User-Agent": user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-GB,en;q=0.9",
        }

    async def fetch(self, url: str) -> CrawlResult:
        """
        Fetch a URL once.

        Args:
            url: The URL to fetch

        Returns:
            CrawlResult with the decoded body

        Raises:
            FetchError: On transport failure or a non-2xx status
        """
        if self._client is None:
            raise RuntimeError("Crawl session not started. Use 'async with' or call start()")

        start_time = time.monotonic()
        try:
            response = await self._client.get(url, headers=self._get_headers())
        except httpx.TimeoutException as e:
            logger.error("Collector error: timeout fetching %s: %s", url, e)
            raise FetchError(url, f"Timeout: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error("Collector error: %s: %s", url, e)
            raise FetchError(url, f"Request error: {e}") from e

        response_time = (time.monotonic() - start_time) * 1000
        logger.info("Visiting: %s\tStatusCode: %s\t%.0fms", url, response.status_code, response_time)

        if not response.is_success:
            raise FetchError(url, f"HTTP {response.status_code}")

        return CrawlResult(
            url=url,
            status_code=response.status_code,
            content=response.text,
            content_type=response.headers.get("content-type", ""),
        )
