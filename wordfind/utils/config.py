"""
Configuration management for the word search tool.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass(frozen=True)
class SearchConfig:
    """Configuration for one search run."""
    word: str = ""
    num_workers: int = 4
    request_timeout: float = 10.0
    user_agent: str = "wordfind/1.0"
    chunk_size: int = 8192
    fail_on_http_error: bool = True


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "WARNING"
    file: Optional[str] = None
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    json: bool = False


@dataclass
class MonitoringConfig:
    """Configuration for monitoring."""
    prometheus_port: int = 8000
    metrics_enabled: bool = False


@dataclass
class Config:
    """Main configuration class."""
    search: SearchConfig = field(default_factory=SearchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)


class ConfigManager:
    """Manages configuration loading and validation."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """Load configuration from YAML file, or defaults when no file is set."""
        config_data: Dict[str, Any] = {}

        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

            with open(self.config_path, 'r') as file:
                config_data = yaml.safe_load(file) or {}

            if not isinstance(config_data, dict):
                raise ValueError(f"Configuration file must contain a mapping: {self.config_path}")

        # Parse configuration sections
        self._config = Config(
            search=SearchConfig(**config_data.get('search', {})),
            logging=LoggingConfig(**config_data.get('logging', {})),
            monitoring=MonitoringConfig(**config_data.get('monitoring', {}))
        )

        self._validate_config()
        return self._config

    def _validate_config(self):
        """Validate configuration values."""
        if not self._config:
            raise ValueError("Configuration not loaded")

        search = self._config.search

        if search.num_workers < 1:
            raise ValueError("num_workers must be at least 1")

        if search.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

        if search.chunk_size < 1:
            raise ValueError("chunk_size must be at least 1")

        if self._config.logging.level.upper() not in LOG_LEVELS:
            raise ValueError(f"logging level must be one of {', '.join(LOG_LEVELS)}")

        logging.getLogger(__name__).debug("Configuration validation passed")

    @property
    def config(self) -> Config:
        """Get the loaded configuration."""
        if not self._config:
            raise ValueError("Configuration not loaded. Call load_config() first.")
        return self._config


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """Load configuration from file, falling back to defaults."""
    return ConfigManager(config_path).load_config()
