"""
Whole-word matcher that counts occurrences of a literal word in a byte stream.
"""

import re
from typing import AsyncIterable, Iterable, Pattern, Union

from .errors import InvalidInputError


class MatchCounter:
    """
    Per-stream counting state.

    Chunks are scanned as they arrive. Only the tail that could still start
    an unconfirmed match (at most ``len(word)`` bytes) plus one byte of
    look-behind for the leading word boundary is carried to the next chunk.
    """

    def __init__(self, pattern: Pattern[bytes], width: int):
        self._pattern = pattern
        self._width = width
        self._buffer = b''
        self._pos = 0
        self._finished = False
        self.count = 0

    def feed(self, chunk: bytes):
        """Scan one chunk of the stream."""
        if self._finished:
            raise RuntimeError("MatchCounter already finished")
        if not chunk:
            return

        buffer = self._buffer + chunk
        end = len(buffer)
        resume = max(self._pos, end - self._width)

        for match in self._pattern.finditer(buffer, self._pos):
            # A match touching the end of the buffer is confirmed only once
            # the next byte (or end of stream) is known.
            if match.end() >= end:
                break
            self.count += 1
            resume = max(resume, match.end())

        keep = max(resume - 1, 0)
        self._buffer = buffer[keep:]
        self._pos = resume - keep

    def finish(self) -> int:
        """Close the stream and return the final count."""
        if not self._finished:
            self.count += sum(1 for _ in self._pattern.finditer(self._buffer, self._pos))
            self._buffer = b''
            self._finished = True
        return self.count


class WordMatcher:
    """
    Counts non-overlapping whole-word matches of a literal word.

    Word boundaries follow regular-expression ``\\b`` semantics on bytes,
    so only ASCII letters, digits and underscore are word characters.
    The matcher is immutable and can be shared between workers.
    """

    def __init__(self, word: Union[str, bytes]):
        if not word:
            raise InvalidInputError("Target word must not be empty")

        self.word = word
        raw = word.encode('utf-8') if isinstance(word, str) else bytes(word)
        self._width = len(raw)
        self._pattern = re.compile(rb'\b' + re.escape(raw) + rb'\b')

    def __repr__(self) -> str:
        return f"WordMatcher({self.word!r})"

    def counter(self) -> MatchCounter:
        """Create fresh counting state for one stream."""
        return MatchCounter(self._pattern, self._width)

    def count(self, data: Union[str, bytes, Iterable[bytes]]) -> int:
        """Count matches in a complete body or in an iterable of byte chunks."""
        if isinstance(data, str):
            data = data.encode('utf-8')
        if isinstance(data, (bytes, bytearray)):
            data = [bytes(data)]

        counter = self.counter()
        for chunk in data:
            counter.feed(chunk)
        return counter.finish()

    async def count_stream(self, chunks: AsyncIterable[bytes]) -> int:
        """Count matches while consuming an asynchronous stream of byte chunks."""
        counter = self.counter()
        async for chunk in chunks:
            counter.feed(chunk)
        return counter.finish()
