"""
Utility modules for the word search tool.
"""

from .config import Config, ConfigManager, SearchConfig, load_config

__all__ = ['Config', 'ConfigManager', 'SearchConfig', 'load_config']
