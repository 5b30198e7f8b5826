"""
wordfind

Counts whole-word occurrences of a word across web pages with a bounded
pool of concurrent workers.
"""

__version__ = "1.0.0"
__description__ = "Concurrent whole-word counter for web pages"
