"""
Command line interface for the word search tool.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys
from typing import List, Optional, Sequence

from . import __version__
from .search.coordinator import Coordinator, SearchReport, validate_search_config
from .search.errors import InvalidInputError
from .search.fetcher import WebFetcher
from .search.reporter import ConsoleReporter
from .utils.config import Config, load_config
from .utils.logger import log_system_info, setup_logging
from .utils.monitoring import MetricsCollector, PoolMonitor


USAGE_ERROR = "Please add number of concurrent requests and a word to find"


class WordFindApp:
    """Wires configuration, fetcher, monitor and coordinator for one run."""

    def __init__(self, config: Config, reporter: Optional[ConsoleReporter] = None):
        self.config = config
        self.reporter = reporter or ConsoleReporter()
        self.logger = logging.getLogger(__name__)
        self.monitor = PoolMonitor(MetricsCollector(
            enable_http_server=config.monitoring.metrics_enabled,
            prometheus_port=config.monitoring.prometheus_port
        ))

    async def run(self, urls: Sequence[str]) -> SearchReport:
        """Search every URL and return the drained report."""
        search = self.config.search
        validate_search_config(search)

        self.logger.info(f"Searching {len(urls)} URLs for '{search.word}' with {search.num_workers} workers")
        self.monitor.metrics.start_server()

        async with WebFetcher(
            user_agent=search.user_agent,
            request_timeout=search.request_timeout,
            chunk_size=search.chunk_size,
            max_connections=search.num_workers * 2,
            fail_on_http_error=search.fail_on_http_error
        ) as fetcher:
            coordinator = Coordinator(search, fetcher, reporter=self.reporter, monitor=self.monitor)
            report = await coordinator.run(urls)
            self.logger.info(f"Fetcher stats: {fetcher.get_stats()}")

        self.logger.info(f"Pool stats: {self.monitor.get_summary()}")
        return report


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='wordfind',
        description="Count whole-word occurrences of a word in web pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  wordfind -find golang https://golang.org https://go.dev
  wordfind -numpar 8 -find python https://python.org
  wordfind --config wordfind.yaml -find cat https://example.com
        """
    )

    parser.add_argument(
        '-numpar', '--numpar',
        type=int,
        default=None,
        help='Number of concurrent requests (default: 4)'
    )

    parser.add_argument(
        '-find', '--find',
        default='',
        help='Word to find (use -find=-word for a word starting with a dash)'
    )

    parser.add_argument(
        '--config',
        default=None,
        help='Optional YAML configuration file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'wordfind {__version__}'
    )

    parser.add_argument(
        'urls',
        nargs='*',
        help='Absolute URLs to search, including the protocol'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if not args.urls or not args.find:
        print(USAGE_ERROR, file=sys.stderr)
        return 1

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        print(f"Error: could not load configuration: {e}", file=sys.stderr)
        return 1

    search = dataclasses.replace(config.search, word=args.find)
    if args.numpar is not None:
        search = dataclasses.replace(search, num_workers=args.numpar)
    config.search = search

    setup_logging(config.logging)
    log_system_info()

    app = WordFindApp(config)
    try:
        asyncio.run(app.run(args.urls))
    except InvalidInputError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
