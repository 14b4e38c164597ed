"""Logging configuration helpers for the Banana Monkey client."""

from __future__ import annotations

import logging
from logging import Logger

from banana_client.config import config


def configure_logging(level: str | None = None) -> Logger:
    """Configure basic logging for the application and return the package logger."""
    logging.basicConfig(
        level=getattr(logging, (level or config.LOG_LEVEL), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    # urllib3 logs every connection at DEBUG, including query strings.
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    return logging.getLogger("banana_client")
