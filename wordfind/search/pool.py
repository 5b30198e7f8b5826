"""
Fixed-size worker pool that fetches jobs and counts word occurrences.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Union

from .errors import FetchError, WordFindError
from .matcher import WordMatcher
from ..utils.logger import get_worker_logger
from ..utils.monitoring import PoolMonitor


@dataclass(frozen=True)
class Job:
    """One validated absolute URL waiting for a worker."""
    url: str


@dataclass(frozen=True)
class Success:
    """A fetched URL and the number of whole-word matches in its body."""
    url: str
    occurrences: int

    def __str__(self) -> str:
        return f"{self.url}\t\t{self.occurrences}"


@dataclass(frozen=True)
class Failure:
    """A URL argument that produced no count."""
    url: Optional[str]
    error: WordFindError

    @property
    def cause(self) -> str:
        return str(self.error)

    def __str__(self) -> str:
        if self.url:
            return f"{self.url}: {self.cause}"
        return self.cause


Outcome = Union[Success, Failure]

# Put on the job queue once per worker after the last job.
_CLOSED = None


class WorkerPool:
    """
    N workers sharing one job queue and one outcome queue.

    Every job taken from the queue produces exactly one outcome. Worker
    exit is tracked separately through the worker tasks themselves.
    """

    def __init__(self, fetcher, matcher: WordMatcher,
                 jobs: asyncio.Queue, outcomes: asyncio.Queue,
                 num_workers: int = 4, monitor: Optional[PoolMonitor] = None):
        if num_workers < 1:
            raise ValueError("num_workers must be at least 1")

        self.fetcher = fetcher
        self.matcher = matcher
        self.jobs = jobs
        self.outcomes = outcomes
        self.num_workers = num_workers
        self.monitor = monitor or PoolMonitor()
        self.logger = logging.getLogger(__name__)

        self.workers: List[asyncio.Task] = []
        self._closed = False
        self._markers_taken = 0

    def start(self):
        """Launch the workers."""
        if self.workers:
            raise RuntimeError("WorkerPool already started")

        for i in range(self.num_workers):
            worker = asyncio.create_task(self._worker(f"worker-{i}"))
            self.workers.append(worker)

        self.logger.info(f"Started worker pool with {self.num_workers} workers")

    async def close(self):
        """Mark the job queue closed. Call after the last job was queued."""
        if self._closed:
            return
        self._closed = True
        for _ in range(self.num_workers):
            await self.jobs.put(_CLOSED)

    async def join(self):
        """Wait until every worker has exited."""
        if self.workers:
            await asyncio.gather(*self.workers)
        self.logger.debug("All workers exited")

    async def cancel(self):
        """Cancel workers that are still running."""
        pending = [worker for worker in self.workers if not worker.done()]
        for worker in pending:
            worker.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
            self.logger.info(f"Cancelled {len(pending)} workers")

    @property
    def pending_jobs(self) -> int:
        """Jobs still waiting in the queue, not counting close markers."""
        markers_left = self.num_workers - self._markers_taken if self._closed else 0
        return self.jobs.qsize() - markers_left

    @property
    def active_workers(self) -> int:
        return sum(1 for worker in self.workers if not worker.done())

    async def _worker(self, worker_id: str):
        """Take jobs until the queue is closed and empty."""
        log = get_worker_logger(__name__, worker_id)
        log.debug("Worker started")
        self.monitor.worker_started()

        try:
            while True:
                job = await self.jobs.get()
                if job is _CLOSED:
                    self._markers_taken += 1
                    break

                self.monitor.update_queue_size(self.pending_jobs)

                outcome = await self._process_job(job, log)
                await self.outcomes.put(outcome)
        finally:
            self.monitor.worker_stopped()
            log.debug("Worker finished")

    async def _process_job(self, job: Job, log) -> Outcome:
        """Fetch one job and count matches. Never raises for job failures."""
        start_time = time.monotonic()

        try:
            async with self.fetcher.open_stream(job.url) as body:
                occurrences = await self.matcher.count_stream(body)

        except FetchError as e:
            self.monitor.record_failure(type(e).__name__, time.monotonic() - start_time)
            log.info(f"Failed to fetch {job.url}: {e}")
            return Failure(url=job.url, error=e)

        except Exception as e:
            self.monitor.record_failure('UnexpectedError', time.monotonic() - start_time)
            log.error(f"Unexpected error processing {job.url}: {e}", exc_info=True)
            return Failure(url=job.url, error=FetchError(job.url, f"Unexpected error: {e}"))

        fetch_time = time.monotonic() - start_time
        self.monitor.record_success(occurrences, fetch_time)
        log.debug(f"Counted {occurrences} matches in {job.url} ({fetch_time:.2f}s)")
        return Success(url=job.url, occurrences=occurrences)
