"""
Coordinator that submits URL jobs to the worker pool and drains the outcomes.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence
from urllib.parse import urlparse

from .errors import InvalidInputError, MissingSchemeError, URLError, URLParseError
from .matcher import WordMatcher
from .pool import Failure, Job, Outcome, Success, WorkerPool
from .reporter import ConsoleReporter
from ..utils.config import SearchConfig
from ..utils.monitoring import PoolMonitor


class CoordinatorState(Enum):
    """Lifecycle of a single search run."""
    INIT = "init"
    SUBMITTING = "submitting"
    POOL_RUNNING = "pool_running"
    DRAINING = "draining"
    DONE = "done"


@dataclass
class SearchReport:
    """Everything drained during one run."""
    total: int = 0
    outcomes: List[Outcome] = field(default_factory=list)

    @property
    def successes(self) -> List[Success]:
        return [o for o in self.outcomes if isinstance(o, Success)]

    @property
    def failures(self) -> List[Failure]:
        return [o for o in self.outcomes if isinstance(o, Failure)]


def parse_job(raw_url: str) -> Job:
    """
    Validate a raw URL argument and turn it into a Job.

    Raises:
        URLParseError: the argument is not a valid URL
        MissingSchemeError: the URL has no protocol or no host
    """
    try:
        parsed = urlparse(raw_url.strip())
    except ValueError as e:
        raise URLParseError(raw_url, f"Invalid URL: {e}")

    if not parsed.scheme or not parsed.netloc:
        raise MissingSchemeError(raw_url, "Please specify protocol")

    return Job(url=parsed.geturl())


def validate_search_config(config: SearchConfig):
    """Reject configurations the pool cannot run with."""
    if not config.word:
        raise InvalidInputError("Target word must not be empty")
    if config.num_workers < 1:
        raise InvalidInputError("Number of concurrent requests must be at least 1")
    if config.request_timeout <= 0:
        raise InvalidInputError("Request timeout must be positive")


class Coordinator:
    """
    Runs one search: submit, start the pool, drain, report.

    The drain loop runs exactly once per URL argument, so it ends even when
    some arguments never reached a worker. Waiting for the workers to exit
    happens afterwards and only depends on the job queue being closed.
    """

    def __init__(self, config: SearchConfig, fetcher,
                 reporter: Optional[ConsoleReporter] = None,
                 monitor: Optional[PoolMonitor] = None):
        validate_search_config(config)

        self.config = config
        self.fetcher = fetcher
        self.matcher = WordMatcher(config.word)
        self.reporter = reporter or ConsoleReporter()
        self.monitor = monitor or PoolMonitor()
        self.logger = logging.getLogger(__name__)

        self.state = CoordinatorState.INIT
        self.remaining = 0

    async def run(self, raw_urls: Sequence[str]) -> SearchReport:
        """
        Count the target word in every URL.

        Args:
            raw_urls: URL arguments as given by the user

        Returns:
            SearchReport with one outcome per argument and the total

        Raises:
            InvalidInputError: no URLs were given
        """
        if self.state is not CoordinatorState.INIT:
            raise RuntimeError("Coordinator can only run once")

        num_requests = len(raw_urls)
        if num_requests == 0:
            raise InvalidInputError("At least one URL must be provided")

        # Sized so that neither submission nor workers ever block on a full queue.
        jobs: asyncio.Queue = asyncio.Queue(maxsize=num_requests + self.config.num_workers)
        outcomes: asyncio.Queue = asyncio.Queue(maxsize=num_requests)
        self.remaining = num_requests

        self.state = CoordinatorState.SUBMITTING
        submitted = self._submit(raw_urls, jobs, outcomes)
        self.logger.info(f"Submitted {submitted} of {num_requests} URLs")
        self.monitor.update_queue_size(jobs.qsize())

        pool = WorkerPool(
            self.fetcher,
            self.matcher,
            jobs,
            outcomes,
            num_workers=self.config.num_workers,
            monitor=self.monitor
        )

        try:
            self.state = CoordinatorState.POOL_RUNNING
            pool.start()
            await pool.close()

            self.state = CoordinatorState.DRAINING
            report = await self._drain(outcomes)

            self.reporter.report_total(report.total)
            await pool.join()
            self.state = CoordinatorState.DONE
        finally:
            await pool.cancel()

        self.logger.info(
            f"Search finished: {len(report.successes)} succeeded, "
            f"{len(report.failures)} failed, total={report.total}"
        )
        return report

    def _submit(self, raw_urls: Sequence[str], jobs: asyncio.Queue,
                outcomes: asyncio.Queue) -> int:
        """Queue valid URLs as jobs and rejected ones as immediate failures."""
        submitted = 0
        for raw_url in raw_urls:
            try:
                job = parse_job(raw_url)
            except URLError as e:
                self.monitor.record_failure(type(e).__name__)
                outcomes.put_nowait(Failure(url=raw_url, error=e))
                continue

            jobs.put_nowait(job)
            submitted += 1
        return submitted

    async def _drain(self, outcomes: asyncio.Queue) -> SearchReport:
        report = SearchReport()

        while self.remaining > 0:
            outcome = await outcomes.get()
            self.remaining -= 1

            if isinstance(outcome, Success):
                report.total += outcome.occurrences
            report.outcomes.append(outcome)
            self.reporter.report_outcome(outcome)

        return report
