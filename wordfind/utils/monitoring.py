"""
Monitoring and metrics collection for the worker pool.
"""

import logging
import time
from typing import Any, Dict, Optional

from prometheus_client import CollectorRegistry, Counter, Gauge, Histogram, start_http_server


class MetricsCollector:
    """Prometheus metrics kept in a private registry."""

    def __init__(self, enable_http_server: bool = False, prometheus_port: int = 8000):
        self.logger = logging.getLogger(__name__)
        self.enable_http_server = enable_http_server
        self.prometheus_port = prometheus_port
        self.registry = CollectorRegistry()

        self.outcomes_total = Counter(
            'wordfind_outcomes_total',
            'Outcomes produced, by kind',
            ['outcome'],
            registry=self.registry
        )
        self.errors_total = Counter(
            'wordfind_errors_total',
            'Failures, by error type',
            ['error_type'],
            registry=self.registry
        )
        self.occurrences_total = Counter(
            'wordfind_occurrences_total',
            'Whole-word matches found',
            registry=self.registry
        )
        self.fetch_seconds = Histogram(
            'wordfind_fetch_seconds',
            'Time to fetch and scan one URL',
            registry=self.registry
        )
        self.active_workers = Gauge(
            'wordfind_active_workers',
            'Number of running workers',
            registry=self.registry
        )
        self.queue_size = Gauge(
            'wordfind_queue_size',
            'Jobs waiting for a worker',
            registry=self.registry
        )

    def start_server(self):
        """Expose the registry over HTTP."""
        if not self.enable_http_server:
            return

        try:
            start_http_server(self.prometheus_port, registry=self.registry)
            self.logger.info(f"Prometheus metrics server started on port {self.prometheus_port}")
        except OSError as e:
            self.logger.error(f"Failed to start Prometheus server: {e}")


class PoolMonitor:
    """High-level monitoring interface for workers and the coordinator."""

    def __init__(self, metrics: Optional[MetricsCollector] = None):
        self.metrics = metrics or MetricsCollector()
        self.logger = logging.getLogger(__name__)
        self.start_time = time.time()
        self.counts = {
            'successes': 0,
            'failures': 0,
            'occurrences': 0,
            'active_workers': 0,
            'queued_jobs': 0
        }

    def record_success(self, occurrences: int, fetch_time: float):
        self.counts['successes'] += 1
        self.counts['occurrences'] += occurrences
        self.metrics.outcomes_total.labels(outcome='success').inc()
        self.metrics.occurrences_total.inc(occurrences)
        self.metrics.fetch_seconds.observe(fetch_time)

    def record_failure(self, error_type: str, fetch_time: Optional[float] = None):
        self.counts['failures'] += 1
        self.metrics.outcomes_total.labels(outcome='failure').inc()
        self.metrics.errors_total.labels(error_type=error_type).inc()
        if fetch_time is not None:
            self.metrics.fetch_seconds.observe(fetch_time)

    def worker_started(self):
        self.counts['active_workers'] += 1
        self.metrics.active_workers.inc()

    def worker_stopped(self):
        self.counts['active_workers'] -= 1
        self.metrics.active_workers.dec()

    def update_queue_size(self, size: int):
        self.counts['queued_jobs'] = size
        self.metrics.queue_size.set(size)

    def get_summary(self) -> Dict[str, Any]:
        """Get a summary of the run so far."""
        runtime = time.time() - self.start_time
        completed = self.counts['successes'] + self.counts['failures']

        return {
            'runtime_seconds': runtime,
            **self.counts,
            'urls_per_second': completed / runtime if runtime > 0 else 0
        }
