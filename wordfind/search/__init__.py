"""
Word search core components.
"""

from .errors import (
    WordFindError, InvalidInputError, URLError, URLParseError,
    MissingSchemeError, FetchError
)
from .matcher import WordMatcher, MatchCounter
from .fetcher import WebFetcher
from .pool import WorkerPool, Job, Success, Failure, Outcome
from .reporter import ConsoleReporter
from .coordinator import Coordinator, CoordinatorState, SearchReport, parse_job

__all__ = [
    'WordFindError', 'InvalidInputError', 'URLError', 'URLParseError',
    'MissingSchemeError', 'FetchError',
    'WordMatcher', 'MatchCounter',
    'WebFetcher',
    'WorkerPool', 'Job', 'Success', 'Failure', 'Outcome',
    'ConsoleReporter',
    'Coordinator', 'CoordinatorState', 'SearchReport', 'parse_job'
]
