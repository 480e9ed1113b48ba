# catalog_pipeline/delegates/downloader_delegate.py
import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ..exceptions import TransportFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    status_code: int
    body: bytes
    url: str

    @property
    def ok(self) -> bool:
        return self.status_code == 200


class DownloaderDelegate:
    """Fetches raw catalog pages over HTTP."""
    def __init__(self, user_agent: str, timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport
        self.client: Optional[httpx.AsyncClient] = None # Created in __aenter__

    async def __aenter__(self):
        self.client = httpx.AsyncClient(
            headers={"User-Agent": self.user_agent},
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
        )
        logger.debug("DownloaderDelegate httpx.AsyncClient initialized.")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self.client:
            await self.client.aclose()
            logger.debug("DownloaderDelegate httpx.AsyncClient closed.")

    async def fetch_page(self, url: str) -> FetchResult:
        """
        Downloads `url` and returns its status code and raw body.
        Non-200 responses are returned as-is; only transport errors raise.
        """
        if not self.client:
            raise RuntimeError("HTTP client not initialized. Use DownloaderDelegate as an async context manager.")

        try:
            logger.debug("Fetching catalog page: %s", url)
            response = await self.client.get(url)
        except httpx.RequestError as e:
            logger.error("Network error fetching %s: %s", url, e)
            raise TransportFailure(f"Network error fetching {url}: {e}", url=url) from e

        logger.debug("Fetched %s with status %d (%d bytes)", url, response.status_code, len(response.content))
        return FetchResult(status_code=response.status_code, body=response.content, url=str(response.url))
