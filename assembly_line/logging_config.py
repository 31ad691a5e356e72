"""Logging configuration and initialization.

This module handles:
- Reading the log level from environment variables
- Setting up Python logging with a single structured console handler
- Quieting noisy third-party loggers outside DEBUG mode
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import TextIO

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass
class LoggingConfig:
    """Configuration for application logging.

    All values are read from environment variables with sensible defaults.
    """

    log_level: str = "INFO"
    stream: TextIO | None = None  # defaults to sys.stdout

    @classmethod
    def from_env(cls) -> "LoggingConfig":
        """Create config from environment variables."""
        return cls(log_level=os.getenv("LOG_LEVEL", "INFO").upper())

    @property
    def level(self) -> int:
        """Numeric logging level; unknown names fall back to INFO."""
        return _LEVEL_MAP.get(self.log_level.upper(), logging.INFO)


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure Python logging based on config.

    Sets up:
    - Root logger with appropriate level
    - assembly_line logger (for discovery and export logging)
    - Console handler with structured format
    """
    config = config or LoggingConfig.from_env()
    level = config.level

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(config.stream or sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(console_handler)

    logging.getLogger("assembly_line").setLevel(level)

    # Reduce noise from third-party libraries unless in DEBUG mode
    if level > logging.DEBUG:
        logging.getLogger("reportlab").setLevel(logging.WARNING)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}")
