"""Logging utilities for the rnaiforge toolkit."""

import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "RNAIFORGE_LOG_LEVEL"


def get_logger(name: str, level: Optional[str] = None) -> logging.Logger:
    """
    Get a logger with standard configuration.

    Args:
        name: Logger name (usually __name__)
        level: Logging level (DEBUG, INFO, WARNING, ERROR). When omitted the
            ``RNAIFORGE_LOG_LEVEL`` environment variable is consulted.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    resolved = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logger.setLevel(getattr(logging, resolved, logging.INFO))

    return logger


def configure_logging(level: str, package: str = "rnaiforge") -> None:
    """Apply ``level`` to every logger already created under ``package``."""
    resolved = getattr(logging, level.upper(), logging.INFO)
    for name in list(logging.root.manager.loggerDict):
        if name == package or name.startswith(f"{package}."):
            logging.getLogger(name).setLevel(resolved)
