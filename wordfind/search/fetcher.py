"""
HTTP fetcher that exposes response bodies as streams of byte chunks.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import aiohttp
from aiohttp import ClientError, ClientResponse, ClientSession, ClientTimeout

from .errors import FetchError


class WebFetcher:
    """
    Fetches web pages with a fixed per-request timeout.

    One ``ClientSession`` is shared by all workers. Each call to
    :meth:`open_stream` owns its response until the context exits.
    """

    def __init__(self, user_agent: str, request_timeout: float = 10,
                 chunk_size: int = 8192, max_connections: int = 8,
                 fail_on_http_error: bool = True):
        self.user_agent = user_agent
        self.request_timeout = request_timeout
        self.chunk_size = chunk_size
        self.max_connections = max_connections
        self.fail_on_http_error = fail_on_http_error

        self.logger = logging.getLogger(__name__)
        self.session: Optional[ClientSession] = None

        # Statistics
        self.stats = {
            'total_requests': 0,
            'successful_requests': 0,
            'failed_requests': 0,
            'total_bytes_downloaded': 0
        }

    async def __aenter__(self):
        """Async context manager entry."""
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def start(self):
        """Initialize the fetcher session."""
        if self.session is None:
            timeout = ClientTimeout(total=self.request_timeout)
            headers = {'User-Agent': self.user_agent}

            self.session = aiohttp.ClientSession(
                timeout=timeout,
                headers=headers,
                connector=aiohttp.TCPConnector(limit=self.max_connections)
            )
            self.logger.info("WebFetcher session started")

    async def close(self):
        """Close the fetcher session."""
        if self.session:
            await self.session.close()
            self.session = None
            self.logger.info("WebFetcher session closed")

    @asynccontextmanager
    async def open_stream(self, url: str) -> AsyncIterator[AsyncIterator[bytes]]:
        """
        GET a URL and yield its body as an async iterator of byte chunks.

        The response is released when the context exits, whether the body
        was consumed completely or not. Timeouts and client errors raised
        while connecting or while reading the body surface as FetchError.

        Args:
            url: Absolute URL to fetch

        Raises:
            FetchError: the request failed, timed out or returned an
                error status
        """
        if self.session is None:
            raise RuntimeError("WebFetcher session not started")

        self.stats['total_requests'] += 1
        try:
            async with self.session.get(url) as response:
                if self.fail_on_http_error and response.status >= 400:
                    self.logger.warning(f"HTTP {response.status} fetching {url}")
                    raise FetchError(
                        url,
                        f"HTTP {response.status} {response.reason or ''}".rstrip(),
                        status_code=response.status
                    )

                self.logger.debug(f"Fetched {url}: {response.status}")
                yield self._iter_body(response)
                self.stats['successful_requests'] += 1

        except FetchError:
            self.stats['failed_requests'] += 1
            raise

        except asyncio.TimeoutError:
            self.stats['failed_requests'] += 1
            self.logger.warning(f"Timeout fetching {url}")
            raise FetchError(url, f"Request timeout after {self.request_timeout}s")

        except ClientError as e:
            self.stats['failed_requests'] += 1
            self.logger.warning(f"Client error fetching {url}: {e}")
            raise FetchError(url, f"Client error ({type(e).__name__}): {e}")

    async def _iter_body(self, response: ClientResponse) -> AsyncIterator[bytes]:
        async for chunk in response.content.iter_chunked(self.chunk_size):
            self.stats['total_bytes_downloaded'] += len(chunk)
            yield chunk

    def get_stats(self) -> Dict[str, int]:
        """Get fetcher statistics."""
        return self.stats.copy()

    def reset_stats(self):
        """Reset statistics counters."""
        for key in self.stats:
            self.stats[key] = 0
