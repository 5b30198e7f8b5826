"""
Error types raised by the word search components.
"""

from typing import Optional


class WordFindError(Exception):
    """Base class for all word search errors."""


class InvalidInputError(WordFindError):
    """Raised for fatal input problems detected before the pool starts."""


class URLError(WordFindError):
    """Raised when a URL argument cannot become a job."""

    def __init__(self, url: str, message: str):
        super().__init__(message)
        self.url = url


class URLParseError(URLError):
    """The argument is not a syntactically valid URL."""


class MissingSchemeError(URLError):
    """The URL has no explicit protocol."""


class FetchError(WordFindError):
    """Network failure, timeout or HTTP error while fetching a URL."""

    def __init__(self, url: str, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
