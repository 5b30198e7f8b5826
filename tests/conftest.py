"""Test configuration and fixtures."""

import asyncio
import io
from contextlib import asynccontextmanager

import pytest

from wordfind.search.errors import FetchError
from wordfind.search.reporter import ConsoleReporter


class FakeFetcher:
    """
    Stands in for WebFetcher.

    ``bodies`` maps a URL to bytes, to an exception raised when the URL is
    opened, or to a list of chunks where an exception element is raised
    while the body is being read.
    """

    def __init__(self, bodies, delays=None, chunk_size=4):
        self.bodies = bodies
        self.delays = delays or {}
        self.chunk_size = chunk_size
        self.requested = []
        self.opened = 0
        self.closed = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        pass

    def get_stats(self):
        return {'total_requests': len(self.requested)}

    @asynccontextmanager
    async def open_stream(self, url):
        self.requested.append(url)
        await asyncio.sleep(self.delays.get(url, 0))

        body = self.bodies[url]
        if isinstance(body, Exception):
            raise body

        self.opened += 1
        try:
            yield self._chunks(body)
        finally:
            self.closed += 1

    async def _chunks(self, body):
        if isinstance(body, list):
            for chunk in body:
                await asyncio.sleep(0)
                if isinstance(chunk, Exception):
                    raise chunk
                yield chunk
            return

        for i in range(0, len(body), self.chunk_size):
            await asyncio.sleep(0)
            yield body[i:i + self.chunk_size]


@pytest.fixture
def fake_fetcher_factory():
    """Build a FakeFetcher for the given bodies."""
    return FakeFetcher


@pytest.fixture
def network_error():
    """A fetch error as raised by WebFetcher for an unreachable host."""
    return FetchError("https://down.example.com", "Client error: Cannot connect to host")


@pytest.fixture
def capture_reporter():
    """A reporter writing to in-memory streams."""
    return ConsoleReporter(out=io.StringIO(), err=io.StringIO())
