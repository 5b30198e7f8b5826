#!/usr/bin/env python3
"""
Main entry point for the word search tool.
"""

import sys

from wordfind.cli import main


if __name__ == '__main__':
    sys.exit(main())
