"""Logging for the WellCare client.

The console UI owns stdout, so log records go to stderr and stay quiet
(WARNING) unless LOG_LEVEL asks for more.
"""

import logging
import os
import sys

from pydantic import BaseModel, Field

DEFAULT_LEVEL = "WARNING"

# Third-party loggers that would otherwise repeat every request line
QUIET_LOGGERS = ("httpx", "httpcore")


def _env_level() -> str:
    return os.getenv("LOG_LEVEL", DEFAULT_LEVEL)


class LogConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default_factory=_env_level)
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"


def setup_logging(config: LogConfig | None = None) -> None:
    """Configure the root logger; module loggers inherit its level."""
    config = config or LogConfig()

    logging.basicConfig(
        level=config.level.upper(),
        format=config.format,
        datefmt=config.date_format,
        stream=sys.stderr,
        force=True,
    )

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, level: str | None = None) -> logging.Logger:
    """Get a logger for a specific module.

    Args:
        name: Module name (typically __name__)
        level: Override for this logger only; otherwise the root level applies

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level.upper())
    return logger
