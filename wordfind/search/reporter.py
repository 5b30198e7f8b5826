"""
Console output for search outcomes.
"""

import sys
from typing import Optional, TextIO

from .pool import Failure, Outcome


class ConsoleReporter:
    """Writes counts to stdout and failures to stderr."""

    def __init__(self, out: Optional[TextIO] = None, err: Optional[TextIO] = None):
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def report_outcome(self, outcome: Outcome):
        """Print one drained outcome."""
        stream = self.err if isinstance(outcome, Failure) else self.out
        print(outcome, file=stream, flush=True)

    def report_total(self, total: int):
        print(f"Sum: \t\t{total}", file=self.out, flush=True)
